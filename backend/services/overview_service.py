from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from backend import repositories
from backend.constants import (
    ACTIVE_ENTERTAINMENT_STATUSES,
    ENTERTAINMENT_TABLE,
    EXPENSES_TABLE,
    PENDING_TODO_LIMIT,
    PROFILES_TABLE,
    TODOS_TABLE,
)
from backend.metrics import ExpenseAggregate, aggregate_expenses, month_start
from backend.presenter import OverviewPresentation, present_overview
from backend.repositories import RecordFilter, RecordOrder
from backend.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverviewCollections:
    profile: Optional[dict]
    monthly_expenses: Tuple[dict, ...]
    pending_todos: Tuple[dict, ...]
    active_entertainment: Tuple[dict, ...]


EMPTY_COLLECTIONS = OverviewCollections(
    profile=None,
    monthly_expenses=(),
    pending_todos=(),
    active_entertainment=(),
)


@dataclass(frozen=True)
class Overview:
    user_email: Optional[str]
    collections: OverviewCollections
    aggregate: ExpenseAggregate
    presentation: OverviewPresentation

    @property
    def authenticated(self) -> bool:
        return self.user_email is not None


def resolve_now(now: datetime | None = None) -> datetime:
    if now is not None:
        return now
    timezone_name = get_settings().dashboard_timezone
    try:
        tzinfo = ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown DASHBOARD_TIMEZONE %r, falling back to UTC", timezone_name)
        tzinfo = timezone.utc
    return datetime.now(tzinfo)


async def _safe_query(label: str, pending: Awaitable[list]) -> list[dict]:
    try:
        return list(await pending)
    except Exception as exc:
        logger.exception("Overview query %s failed: %s", label, exc)
        return []


async def collect_overview(user_email: str | None, now: datetime | None = None, query=None) -> OverviewCollections:
    """Run the four scoped reads behind the overview page.

    The reads are independent and joined with ``asyncio.gather``. A read that
    fails contributes an empty collection; a missing identity short-circuits to
    all-empty without touching the store.
    """
    if not user_email:
        return EMPTY_COLLECTIONS
    query = query or repositories.query_records
    now = resolve_now(now)

    profile_rows, expenses, todos, entertainment = await asyncio.gather(
        _safe_query("profile", query(user_email, PROFILES_TABLE, limit=1)),
        _safe_query(
            "monthly_expenses",
            query(
                user_email,
                EXPENSES_TABLE,
                [RecordFilter("date", "gte", month_start(now))],
                order=[RecordOrder("date"), RecordOrder("created_at")],
            ),
        ),
        _safe_query(
            "pending_todos",
            query(
                user_email,
                TODOS_TABLE,
                [RecordFilter("completed", "eq", False)],
                order=[RecordOrder("due_date", nulls_last=True), RecordOrder("created_at")],
                limit=PENDING_TODO_LIMIT,
            ),
        ),
        _safe_query(
            "active_entertainment",
            query(
                user_email,
                ENTERTAINMENT_TABLE,
                [RecordFilter("status", "in", ACTIVE_ENTERTAINMENT_STATUSES)],
                order=RecordOrder("created_at", descending=True),
            ),
        ),
    )
    return OverviewCollections(
        profile=profile_rows[0] if profile_rows else None,
        monthly_expenses=tuple(expenses),
        pending_todos=tuple(todos[:PENDING_TODO_LIMIT]),
        active_entertainment=tuple(entertainment),
    )


def derive_overview(user_email: str | None, collections: OverviewCollections, now: datetime) -> Overview:
    aggregate = aggregate_expenses(collections.monthly_expenses, now)
    presentation = present_overview(
        aggregate,
        collections.pending_todos,
        collections.active_entertainment,
    )
    return Overview(
        user_email=user_email or None,
        collections=collections,
        aggregate=aggregate,
        presentation=presentation,
    )


async def build_overview(user_email: str | None, now: datetime | None = None, query=None) -> Overview:
    if not user_email:
        return derive_overview(None, EMPTY_COLLECTIONS, now or datetime.now(timezone.utc))
    now = resolve_now(now)
    collections = await collect_overview(user_email, now=now, query=query)
    return derive_overview(user_email, collections, now)
