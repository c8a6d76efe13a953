from datetime import date

import pandas as pd
import streamlit as st

from dashboard.constants import EXPENSE_CATEGORIES
from dashboard.data import repositories
from dashboard.state import session_slices
from dashboard.visualizations import format_currency

SLICE = "expenses"


def _editing_expense(expenses):
    editing_id = session_slices.get_value(SLICE, "editing_id")
    if not editing_id:
        return None
    return next((item for item in expenses if item.get("id") == editing_id), None)


def _submit_expense(editing, amount, description, category, day):
    if amount <= 0:
        st.error("Amount must be greater than 0")
        return
    if not description.strip():
        st.error("Description is required")
        return
    try:
        if editing:
            repositories.update_expense(editing["id"], amount, description.strip(), category, day)
        else:
            repositories.create_expense(amount, description.strip(), category, day)
    except RuntimeError as exc:
        st.error(f"Could not save expense: {exc}")
        return
    session_slices.clear_slice(SLICE)
    st.rerun()


def _render_form(editing):
    title = "Edit expense" if editing else "Add expense"
    with st.form("expenses.form", clear_on_submit=not editing):
        st.markdown(f"**{title}**")
        cols = st.columns(2)
        amount = cols[0].number_input(
            "Amount",
            min_value=0.0,
            step=0.01,
            format="%.2f",
            value=float(editing["amount"]) if editing else 0.0,
        )
        default_category = editing.get("category") if editing else EXPENSE_CATEGORIES[0]
        category = cols[1].selectbox(
            "Category",
            EXPENSE_CATEGORIES,
            index=EXPENSE_CATEGORIES.index(default_category) if default_category in EXPENSE_CATEGORIES else 0,
        )
        description = st.text_input("Description", value=editing.get("description", "") if editing else "")
        day = st.date_input(
            "Date",
            value=date.fromisoformat(editing["date"][:10]) if editing else date.today(),
        )
        submit_cols = st.columns(2)
        submitted = submit_cols[0].form_submit_button("Update" if editing else "Add")
        cancelled = submit_cols[1].form_submit_button("Cancel") if editing else False
    if cancelled:
        session_slices.clear_slice(SLICE)
        st.rerun()
    if submitted:
        _submit_expense(editing, amount, description, category, day)


def _render_list(expenses):
    if not expenses:
        st.caption("No expenses yet.")
        return
    frame = pd.DataFrame(expenses)
    frame["amount"] = frame["amount"].astype(float)
    st.metric("Total (filtered)", format_currency(frame["amount"].sum()))
    for item in expenses:
        cols = st.columns([3, 2, 2, 2, 1, 1])
        cols[0].write(item.get("description"))
        cols[1].write(item.get("category"))
        cols[2].write(str(item.get("date"))[:10])
        cols[3].write(format_currency(item.get("amount")))
        if cols[4].button("Edit", key=f"expenses.edit.{item['id']}"):
            session_slices.set_value(SLICE, "editing_id", item["id"])
            st.rerun()
        if cols[5].button("Delete", key=f"expenses.delete.{item['id']}"):
            try:
                repositories.delete_expense(item["id"])
            except RuntimeError as exc:
                st.error(f"Could not delete expense: {exc}")
            else:
                st.rerun()


def render_expenses_tab(ctx):
    st.subheader("Expenses")
    selected = st.selectbox("Category", ["all", *EXPENSE_CATEGORIES], key="expenses.category_filter")
    try:
        expenses = repositories.list_expenses(selected)
    except RuntimeError as exc:
        st.error(f"Could not load expenses: {exc}")
        return
    _render_form(_editing_expense(expenses))
    _render_list(expenses)
