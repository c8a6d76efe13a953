from datetime import date

import streamlit as st

from dashboard.constants import ENTERTAINMENT_ICONS
from dashboard.visualizations import category_bar_chart, format_currency, trend_line_chart


def _format_due(raw_value):
    try:
        return date.fromisoformat(str(raw_value)[:10]).strftime("%d %b %Y")
    except ValueError:
        return str(raw_value)


def _render_summary(summary):
    cols = st.columns(3)
    cols[0].metric("Total Expenses · This Month", format_currency(summary.get("total_monthly_expense")))
    cols[1].metric("Pending Tasks", int(summary.get("pending_todo_count", 0) or 0))
    cols[2].metric("Playing/Watching", int(summary.get("active_entertainment_count", 0) or 0))


def _render_charts(overview):
    trend_fig = trend_line_chart(overview.get("trend_series") or [])
    category_fig = category_bar_chart(overview.get("category_series") or [])
    charts = [fig for fig in (trend_fig, category_fig) if fig is not None]
    if not charts:
        return
    cols = st.columns(len(charts))
    for col, fig in zip(cols, charts):
        col.plotly_chart(fig, use_container_width=True)


def _render_pending_todos(todos):
    st.markdown("**Upcoming Tasks** · next 5")
    if not todos:
        st.caption("No pending tasks. You're all caught up! 🎉")
        return
    for todo in todos:
        line = f"• {todo.get('title')}"
        if todo.get("due_date"):
            line += f" (due {_format_due(todo['due_date'])})"
        st.markdown(line)


def _render_active_entertainment(items):
    st.markdown("**In Progress** · entertainment")
    if not items:
        st.caption("Start playing or watching something!")
        return
    for item in items:
        icon = ENTERTAINMENT_ICONS.get(item.get("type"), "📺")
        st.markdown(f"{icon} {item.get('title')} · {item.get('type')} • {item.get('status')}")


def render_overview_tab(ctx):
    overview = ctx.get("overview") or {}
    st.subheader("Overview")
    st.caption("Your personal dashboard at a glance")
    if not overview.get("authenticated", False):
        st.info("Sign in to see your dashboard.")

    _render_summary(overview.get("summary") or {})
    _render_charts(overview)

    cols = st.columns(2)
    with cols[0]:
        _render_pending_todos(overview.get("pending_todos") or [])
    with cols[1]:
        _render_active_entertainment(overview.get("active_entertainment") or [])
