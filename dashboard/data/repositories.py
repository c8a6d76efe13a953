"""HTTP-backed reads and writes used by the Streamlit tabs.

Reads are cached per user for a short while; every write clears the cache so
the next rerun reloads lists and the overview from scratch.
"""
import streamlit as st

from dashboard.data import api_client

_CURRENT_USER_GETTER = None


def configure(current_user_getter):
    global _CURRENT_USER_GETTER
    _CURRENT_USER_GETTER = current_user_getter


def _current_user():
    if _CURRENT_USER_GETTER is None:
        raise RuntimeError("repositories not configured")
    return _CURRENT_USER_GETTER()


def invalidate():
    st.cache_data.clear()


def _mutate(method, path, json=None):
    try:
        return api_client.request(method, path, json=json)
    finally:
        invalidate()


@st.cache_data(ttl=30, show_spinner=False)
def _load_overview_cached(user_email):
    return api_client.request("GET", "/v1/overview", allow_anonymous=True)


def load_overview():
    return _load_overview_cached(_current_user())


@st.cache_data(ttl=30, show_spinner=False)
def _list_cached(user_email, path, params_items):
    payload = api_client.request("GET", path, params=dict(params_items) or None)
    return payload.get("items", [])


def _list(path, params=None):
    params_items = tuple(sorted((params or {}).items()))
    return _list_cached(_current_user(), path, params_items)


# Expenses


def list_expenses(category=None):
    params = {"category": category} if category and category != "all" else None
    return _list("/v1/expenses", params)


def create_expense(amount, description, category, day):
    return _mutate(
        "POST",
        "/v1/expenses",
        {"amount": amount, "description": description, "category": category, "date": day.isoformat()},
    )


def update_expense(expense_id, amount, description, category, day):
    return _mutate(
        "PATCH",
        f"/v1/expenses/{expense_id}",
        {"amount": amount, "description": description, "category": category, "date": day.isoformat()},
    )


def delete_expense(expense_id):
    return _mutate("DELETE", f"/v1/expenses/{expense_id}")


# Todos


def list_todos():
    return _list("/v1/todos")


def create_todo(title, description=None, due_date=None):
    return _mutate(
        "POST",
        "/v1/todos",
        {
            "title": title,
            "description": description or None,
            "due_date": due_date.isoformat() if due_date else None,
        },
    )


def set_todo_completed(todo_id, completed):
    return _mutate("PATCH", f"/v1/todos/{todo_id}", {"completed": bool(completed)})


def delete_todo(todo_id):
    return _mutate("DELETE", f"/v1/todos/{todo_id}")


# Projects


def list_projects():
    return _list("/v1/projects")


def create_project(title, description=None, status="idea"):
    return _mutate(
        "POST",
        "/v1/projects",
        {"title": title, "description": description or None, "status": status},
    )


def set_project_status(project_id, status):
    return _mutate("PATCH", f"/v1/projects/{project_id}", {"status": status})


def delete_project(project_id):
    return _mutate("DELETE", f"/v1/projects/{project_id}")


# Entertainment


def list_entertainment(item_type=None):
    return _list("/v1/entertainment", {"type": item_type} if item_type else None)


def create_entertainment(title, item_type, status):
    return _mutate("POST", "/v1/entertainment", {"title": title, "type": item_type, "status": status})


def set_entertainment_status(item_id, status):
    return _mutate("PATCH", f"/v1/entertainment/{item_id}", {"status": status})


def delete_entertainment(item_id):
    return _mutate("DELETE", f"/v1/entertainment/{item_id}")


# Profile


@st.cache_data(ttl=60, show_spinner=False)
def _get_profile_cached(user_email):
    payload = api_client.request("GET", "/v1/profile")
    return payload.get("profile") or {}


def get_profile():
    return _get_profile_cached(_current_user())


def save_profile(username=None, avatar_url=None):
    payload = {}
    if username is not None:
        payload["username"] = username
    if avatar_url is not None:
        payload["avatar_url"] = avatar_url
    return _mutate("PUT", "/v1/profile", payload)
