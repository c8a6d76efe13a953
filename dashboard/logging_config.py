import logging
import os

_CONFIGURED = False


def configure_logging():
    # Streamlit re-executes the script on every interaction.
    global _CONFIGURED
    if _CONFIGURED:
        return
    level_name = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    for noisy in ("urllib3", "requests", "watchdog"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    _CONFIGURED = True
