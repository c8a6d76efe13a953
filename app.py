import logging

import streamlit as st

from dashboard.auth import get_current_user_email, get_display_name, get_secret
from dashboard.context import DashboardContext
from dashboard.data import api_client, repositories
from dashboard.header import render_profile_header
from dashboard.logging_config import configure_logging
from dashboard.router import render_router

EMPTY_OVERVIEW = {
    "authenticated": False,
    "profile": None,
    "summary": {"total_monthly_expense": 0.0, "pending_todo_count": 0, "active_entertainment_count": 0},
    "category_series": [],
    "trend_series": [],
    "pending_todos": [],
    "active_entertainment": [],
}

configure_logging()
logger = logging.getLogger("dashboard")

st.set_page_config(page_title="Life Dashboard", page_icon="📊", layout="wide")

api_client.configure(get_secret, get_current_user_email)
repositories.configure(get_current_user_email)

if not api_client.is_enabled():
    st.error("Backend not configured. Set API_BASE_URL and BACKEND_SESSION_SECRET.")
    st.stop()

current_user_email = get_current_user_email()

backend_ok = True
try:
    overview = repositories.load_overview()
except RuntimeError as exc:
    logger.exception("Failed to load overview: %s", exc)
    overview = EMPTY_OVERVIEW
    backend_ok = False

context = DashboardContext(
    user_email=current_user_email,
    user_name=get_display_name(current_user_email, overview.get("profile")),
    backend_ok=backend_ok,
    payload={"overview": overview},
)

render_profile_header(context)
render_router(context)
