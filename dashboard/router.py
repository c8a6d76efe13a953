import streamlit as st

from dashboard.constants import TAB_OPTIONS
from dashboard.tabs.entertainment_tab import render_entertainment_tab
from dashboard.tabs.expenses_tab import render_expenses_tab
from dashboard.tabs.overview_tab import render_overview_tab
from dashboard.tabs.profile_tab import render_profile_tab
from dashboard.tabs.projects_tab import render_projects_tab
from dashboard.tabs.todos_tab import render_todos_tab


TAB_RENDERERS = {
    "Overview": render_overview_tab,
    "Expenses": render_expenses_tab,
    "Todos": render_todos_tab,
    "Projects": render_projects_tab,
    "Entertainment": render_entertainment_tab,
    "Profile": render_profile_tab,
}


def render_router(ctx):
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )
    renderer = TAB_RENDERERS.get(active or TAB_OPTIONS[0], render_overview_tab)
    return _render_fragment(renderer, ctx)


@st.fragment
def _render_fragment(renderer, ctx):
    renderer(ctx)
