import streamlit as st

from dashboard.constants import PROJECT_STATUSES, PROJECT_STATUS_LABELS
from dashboard.data import repositories


def _render_form():
    with st.form("projects.form", clear_on_submit=True):
        title = st.text_input("Title")
        description = st.text_area("Description", height=80)
        status = st.selectbox(
            "Status",
            [key for key, _ in PROJECT_STATUSES],
            format_func=lambda key: PROJECT_STATUS_LABELS[key],
        )
        submitted = st.form_submit_button("Add project")
    if not submitted:
        return
    if not title.strip():
        st.error("Title is required")
        return
    try:
        repositories.create_project(title.strip(), description.strip(), status)
    except RuntimeError as exc:
        st.error(f"Could not add project: {exc}")
        return
    st.rerun()


def _render_card(project):
    with st.container(border=True):
        st.markdown(f"**{project.get('title')}**")
        if project.get("description"):
            st.caption(project["description"])
        statuses = [key for key, _ in PROJECT_STATUSES]
        current = project.get("status") if project.get("status") in statuses else statuses[0]
        new_status = st.selectbox(
            "Move to",
            statuses,
            index=statuses.index(current),
            format_func=lambda key: PROJECT_STATUS_LABELS[key],
            key=f"projects.status.{project['id']}",
        )
        if new_status != current:
            try:
                repositories.set_project_status(project["id"], new_status)
            except RuntimeError as exc:
                st.error(f"Could not move project: {exc}")
            else:
                st.rerun()
        if st.button("Delete", key=f"projects.delete.{project['id']}"):
            try:
                repositories.delete_project(project["id"])
            except RuntimeError as exc:
                st.error(f"Could not delete project: {exc}")
            else:
                st.rerun()


def render_projects_tab(ctx):
    st.subheader("Projects")
    _render_form()
    try:
        projects = repositories.list_projects()
    except RuntimeError as exc:
        st.error(f"Could not load projects: {exc}")
        return
    columns = st.columns(len(PROJECT_STATUSES))
    for column, (status, label) in zip(columns, PROJECT_STATUSES):
        bucket = [item for item in projects if item.get("status") == status]
        with column:
            st.markdown(f"**{label}** ({len(bucket)})")
            for project in bucket:
                _render_card(project)
