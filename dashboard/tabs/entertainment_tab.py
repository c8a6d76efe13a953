import streamlit as st

from dashboard.constants import (
    ENTERTAINMENT_ICONS,
    ENTERTAINMENT_STATUS_OPTIONS,
    ENTERTAINMENT_TYPE_LABELS,
    ENTERTAINMENT_TYPES,
)
from dashboard.data import repositories


def _status_labels(item_type):
    return dict(ENTERTAINMENT_STATUS_OPTIONS[item_type])


def _render_form(item_type):
    labels = _status_labels(item_type)
    with st.form(f"entertainment.form.{item_type}", clear_on_submit=True):
        title = st.text_input("Title")
        status = st.selectbox("Status", list(labels.keys()), format_func=lambda key: labels[key])
        submitted = st.form_submit_button(f"Add {ENTERTAINMENT_TYPE_LABELS[item_type].lower()}")
    if not submitted:
        return
    if not title.strip():
        st.error("Title is required")
        return
    try:
        repositories.create_entertainment(title.strip(), item_type, status)
    except RuntimeError as exc:
        st.error(f"Could not add item: {exc}")
        return
    st.rerun()


def _render_item(item, item_type):
    labels = _status_labels(item_type)
    statuses = list(labels.keys())
    current = item.get("status") if item.get("status") in statuses else statuses[0]
    cols = st.columns([5, 3, 1])
    cols[0].markdown(f"{ENTERTAINMENT_ICONS.get(item_type, '')} {item.get('title')}")
    new_status = cols[1].selectbox(
        "Status",
        statuses,
        index=statuses.index(current),
        format_func=lambda key: labels[key],
        key=f"entertainment.status.{item['id']}",
        label_visibility="collapsed",
    )
    if new_status != current:
        try:
            repositories.set_entertainment_status(item["id"], new_status)
        except RuntimeError as exc:
            st.error(f"Could not update item: {exc}")
        else:
            st.rerun()
    if cols[2].button("Delete", key=f"entertainment.delete.{item['id']}"):
        try:
            repositories.delete_entertainment(item["id"])
        except RuntimeError as exc:
            st.error(f"Could not delete item: {exc}")
        else:
            st.rerun()


def render_entertainment_tab(ctx):
    st.subheader("Entertainment")
    item_type = st.segmented_control(
        "Type",
        [key for key, _ in ENTERTAINMENT_TYPES],
        format_func=lambda key: ENTERTAINMENT_TYPE_LABELS[key],
        default="game",
        key="entertainment.type",
    ) or "game"
    _render_form(item_type)
    try:
        items = repositories.list_entertainment(item_type)
    except RuntimeError as exc:
        st.error(f"Could not load items: {exc}")
        return
    if not items:
        st.caption("Nothing here yet.")
        return
    for item in items:
        _render_item(item, item_type)
