from datetime import date
from decimal import Decimal

import pytest

from backend.services import overview_service
from backend.services.overview_service import EMPTY_COLLECTIONS, build_overview, collect_overview
from backend.settings import reset_settings
from factories import NOW, OTHER_USER, TODAY, USER, FakeStore, days_ago, entertainment, expense, todo


def _store(**overrides):
    rows = {
        "profiles": [
            {"user_email": USER, "username": "ana", "avatar_url": None, "created_at": NOW, "updated_at": NOW},
            {"user_email": OTHER_USER, "username": "bruno", "avatar_url": None, "created_at": NOW, "updated_at": NOW},
        ],
        "expenses": [
            expense(Decimal("40.00"), "Bills", days_ago(3)),
            expense(Decimal("12.50"), "Food", TODAY),
            expense(Decimal("7.25"), "Food", TODAY, id="second-food"),
            expense(Decimal("99.00"), "Shopping", date(2026, 9, 30)),
            expense(Decimal("500.00"), "Bills", TODAY, user_email=OTHER_USER),
        ],
        "todos": [
            todo("open"),
            todo("done", completed=True),
            todo("theirs", user_email=OTHER_USER),
        ],
        "entertainment": [
            entertainment("old", "game", "playing", created_offset=10),
            entertainment("new", "series", "watching", created_offset=1),
            entertainment("queued", "movie", "backlog"),
            entertainment("finished", "game", "completed"),
        ],
    }
    rows.update(overrides)
    return FakeStore(rows)


@pytest.mark.asyncio
async def test_collects_scoped_windowed_collections():
    store = _store()

    collections = await collect_overview(USER, now=NOW, query=store.query_records)

    assert collections.profile["username"] == "ana"
    assert [row["date"] for row in collections.monthly_expenses] == [days_ago(3), TODAY, TODAY]
    assert all(row["user_email"] == USER for row in collections.monthly_expenses)
    assert [row["title"] for row in collections.pending_todos] == ["open"]
    assert [row["title"] for row in collections.active_entertainment] == ["new", "old"]


@pytest.mark.asyncio
async def test_pending_todos_cap_and_null_due_dates_last():
    todos = [
        todo("no-due-a", created_offset=30),
        todo("due-late", due_date=date(2026, 11, 2)),
        todo("no-due-b", created_offset=20),
        todo("due-soon", due_date=date(2026, 10, 20)),
        todo("no-due-c", created_offset=10),
        todo("due-mid", due_date=date(2026, 10, 25)),
    ]
    store = _store(todos=todos)

    collections = await collect_overview(USER, now=NOW, query=store.query_records)

    assert len(collections.pending_todos) == 5
    assert [row["title"] for row in collections.pending_todos] == [
        "due-soon",
        "due-mid",
        "due-late",
        "no-due-a",
        "no-due-b",
    ]


@pytest.mark.asyncio
async def test_pending_todo_count_never_exceeds_five():
    store = _store(todos=[todo(f"t{i}") for i in range(12)])

    overview = await build_overview(USER, now=NOW, query=store.query_records)

    assert overview.presentation.summary.pending_todo_count == 5


@pytest.mark.asyncio
async def test_unauthenticated_yields_empty_overview_without_queries():
    store = _store()

    collections = await collect_overview(None, now=NOW, query=store.query_records)
    overview = await build_overview(None, now=NOW, query=store.query_records)

    assert collections == EMPTY_COLLECTIONS
    assert store.calls == []
    assert not overview.authenticated
    summary = overview.presentation.summary
    assert summary.total_monthly_expense == Decimal("0")
    assert summary.pending_todo_count == 0
    assert summary.active_entertainment_count == 0
    assert overview.presentation.category_series == ()
    assert overview.presentation.trend_series == ()


@pytest.mark.asyncio
async def test_failed_query_degrades_to_empty_collection():
    store = _store()
    store.failing = {"expenses", "profiles"}

    collections = await collect_overview(USER, now=NOW, query=store.query_records)

    assert collections.profile is None
    assert collections.monthly_expenses == ()
    assert [row["title"] for row in collections.pending_todos] == ["open"]
    assert len(collections.active_entertainment) == 2


@pytest.mark.asyncio
async def test_all_queries_are_issued():
    store = _store()

    await collect_overview(USER, now=NOW, query=store.query_records)

    assert sorted(store.calls) == ["entertainment", "expenses", "profiles", "todos"]


@pytest.mark.asyncio
async def test_build_overview_end_to_end():
    store = _store()

    overview = await build_overview(USER, now=NOW, query=store.query_records)
    presentation = overview.presentation

    assert overview.authenticated
    assert presentation.summary.total_monthly_expense == Decimal("59.75")
    assert [(item.label, item.value) for item in presentation.category_series] == [
        ("Bills", Decimal("40.00")),
        ("Food", Decimal("19.75")),
    ]
    assert [(point.label, point.value) for point in presentation.trend_series] == [
        ("Oct 16", Decimal("40.00")),
        ("Oct 19", Decimal("19.75")),
    ]
    assert presentation.summary.active_entertainment_count == 2


@pytest.mark.asyncio
async def test_default_query_is_the_repository(monkeypatch):
    store = _store()
    monkeypatch.setattr(overview_service.repositories, "query_records", store.query_records)

    overview = await build_overview(USER, now=NOW)

    assert overview.presentation.summary.total_monthly_expense == Decimal("59.75")


def test_resolve_now_uses_configured_timezone(monkeypatch):
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "America/Sao_Paulo")
    reset_settings()

    now = overview_service.resolve_now()

    assert now.tzinfo is not None
    assert str(now.tzinfo) == "America/Sao_Paulo"


def test_resolve_now_falls_back_to_utc(monkeypatch):
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Not/AZone")
    reset_settings()

    assert overview_service.resolve_now().utcoffset().total_seconds() == 0
