import streamlit as st

from dashboard.data import repositories


def _toggle_todo(todo_id, widget_key):
    try:
        repositories.set_todo_completed(todo_id, st.session_state.get(widget_key, False))
    except RuntimeError as exc:
        st.session_state["todos.error"] = str(exc)


def _render_form():
    with st.form("todos.form", clear_on_submit=True):
        title = st.text_input("Title")
        description = st.text_area("Description", height=80)
        has_due = st.checkbox("Has due date")
        due_date = st.date_input("Due date")
        submitted = st.form_submit_button("Add todo")
    if not submitted:
        return
    if not title.strip():
        st.error("Title is required")
        return
    try:
        repositories.create_todo(title.strip(), description.strip(), due_date if has_due else None)
    except RuntimeError as exc:
        st.error(f"Could not add todo: {exc}")
        return
    st.rerun()


def completion_caption(todos):
    completed = sum(1 for todo in todos if todo.get("completed"))
    return f"{completed} of {len(todos)} tasks completed"


def render_todos_tab(ctx):
    st.subheader("Todos")
    _render_form()
    error = st.session_state.pop("todos.error", None)
    if error:
        st.error(f"Could not update todo: {error}")
    try:
        todos = repositories.list_todos()
    except RuntimeError as exc:
        st.error(f"Could not load todos: {exc}")
        return
    if not todos:
        st.caption("No todos yet.")
        return
    st.caption(completion_caption(todos))
    for todo in todos:
        widget_key = f"todos.done.{todo['id']}"
        cols = st.columns([6, 2, 1])
        cols[0].checkbox(
            todo.get("title") or "Untitled",
            value=bool(todo.get("completed")),
            key=widget_key,
            on_change=_toggle_todo,
            args=(todo["id"], widget_key),
        )
        if todo.get("due_date"):
            cols[1].caption(f"Due {str(todo['due_date'])[:10]}")
        if cols[2].button("Delete", key=f"todos.delete.{todo['id']}"):
            try:
                repositories.delete_todo(todo["id"])
            except RuntimeError as exc:
                st.error(f"Could not delete todo: {exc}")
            else:
                st.rerun()
