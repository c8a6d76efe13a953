from datetime import date

import pytest

from backend import repositories
from backend.repositories import RecordFilter, RecordOrder, build_record_query
from factories import USER


def test_owner_scope_is_always_applied():
    statement, params = build_record_query(USER, "todos")

    assert "WHERE user_email = :scope_user_email" in str(statement)
    assert params == {"scope_user_email": USER}


def test_filters_order_and_limit_render_to_sql():
    statement, params = build_record_query(
        USER,
        "todos",
        [RecordFilter("completed", "eq", False)],
        order=[RecordOrder("due_date", nulls_last=True), RecordOrder("created_at")],
        limit=5,
    )
    sql = str(statement)

    assert "completed = :f0_completed" in sql
    assert sql.endswith("ORDER BY due_date ASC NULLS LAST, created_at ASC LIMIT :row_limit")
    assert params["f0_completed"] is False
    assert params["row_limit"] == 5


def test_descending_order():
    statement, _ = build_record_query(USER, "entertainment", order=RecordOrder("created_at", descending=True))

    assert "ORDER BY created_at DESC" in str(statement)


def test_membership_filter_uses_expanding_param():
    statement, params = build_record_query(
        USER,
        "entertainment",
        [RecordFilter("status", "in", ["playing", "watching"])],
    )

    assert "status IN" in str(statement)
    assert params["f0_status"] == ["playing", "watching"]
    assert statement._bindparams["f0_status"].expanding


def test_range_filter_keeps_value():
    statement, params = build_record_query(USER, "expenses", [RecordFilter("date", "gte", date(2026, 10, 1))])

    assert "date >= :f0_date" in str(statement)
    assert params["f0_date"] == date(2026, 10, 1)


def test_null_comparisons_render_is_null():
    statement, params = build_record_query(
        USER,
        "todos",
        [RecordFilter("due_date", "eq", None), RecordFilter("description", "neq", None)],
    )
    sql = str(statement)

    assert "due_date IS NULL" in sql
    assert "description IS NOT NULL" in sql
    assert set(params) == {"scope_user_email"}


def test_profiles_select_without_id_column():
    statement, _ = build_record_query(USER, "profiles", limit=1)

    assert str(statement).startswith("SELECT user_email, ")
    assert " id," not in str(statement)


@pytest.mark.parametrize(
    "collection, filters, order",
    [
        ("habits", (), None),
        ("todos", [RecordFilter("password", "eq", "x")], None),
        ("todos", [RecordFilter("title", "like", "%a%")], None),
        ("todos", (), RecordOrder("user_email; DROP TABLE todos")),
    ],
)
def test_rejects_unknown_collection_field_or_operator(collection, filters, order):
    with pytest.raises(ValueError):
        build_record_query(USER, collection, filters, order)


@pytest.mark.asyncio
async def test_update_todo_drops_null_completed(monkeypatch):
    calls = []

    async def _update(collection, user_email, record_id, patch):
        calls.append(patch)
        return {"id": record_id}

    monkeypatch.setattr(repositories, "_update_record", _update)

    await repositories.update_todo(USER, "t1", {"completed": None, "due_date": None})
    await repositories.update_todo(USER, "t1", {"completed": 1})

    assert calls == [{"due_date": None}, {"completed": True}]
