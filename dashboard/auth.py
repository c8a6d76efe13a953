import os

import streamlit as st

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
    ("app", "user_email"): "DASHBOARD_USER_EMAIL",
}


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except (FileNotFoundError, KeyError):
        return default
    return current


def get_current_user_email():
    """Identity of the signed-in Streamlit user, or the configured local user.

    Returns ``None`` when neither is available; the overview then renders its
    logged-out empty state.
    """
    user = getattr(st, "user", None)
    user_email = str(getattr(user, "email", "") or "").strip().lower()
    if user_email:
        return user_email
    fallback = str(get_secret(("app", "user_email")) or "").strip().lower()
    return fallback or None


def get_display_name(user_email, profile=None):
    username = str((profile or {}).get("username") or "").strip()
    if username:
        return username
    user_name = str(getattr(getattr(st, "user", None), "name", "") or "").strip()
    if user_name:
        return user_name.split()[0]
    local = (user_email or "").split("@")[0].replace(".", " ").strip()
    return local.title() if local else "User"
