from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable

from backend.constants import TREND_WINDOW_DAYS

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
FALLBACK_CATEGORY = "Other"


@dataclass(frozen=True)
class ExpenseAggregate:
    """Sums over one snapshot of expense rows.

    ``total`` keeps full precision; rounding happens when presenting. Both
    mappings keep the insertion order of the first record seen for each key.
    ``by_day`` is keyed by calendar date, never by a display string.
    """

    total: Decimal
    by_category: Dict[str, Decimal]
    by_day: Dict[date, Decimal]


def to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            logger.warning("Ignoring unparseable expense amount: %r", value)
            return ZERO
    if not amount.is_finite():
        logger.warning("Ignoring non-finite expense amount: %r", value)
        return ZERO
    return amount


def to_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def month_start(now: datetime | date) -> date:
    today = now.date() if isinstance(now, datetime) else now
    return today.replace(day=1)


def trend_window_start(now: datetime) -> datetime:
    return now - timedelta(days=TREND_WINDOW_DAYS)


def in_trend_window(day: date, now: datetime) -> bool:
    # A row dated D counts from local midnight of D.
    return datetime.combine(day, time.min, tzinfo=now.tzinfo) >= trend_window_start(now)


def category_label(record: dict) -> str:
    label = record.get("category")
    if label is None or not str(label).strip():
        return FALLBACK_CATEGORY
    return str(label)


def aggregate_expenses(expenses: Iterable[dict], now: datetime) -> ExpenseAggregate:
    total = ZERO
    by_category: Dict[str, Decimal] = {}
    by_day: Dict[date, Decimal] = {}
    for record in expenses:
        amount = to_decimal(record.get("amount"))
        total += amount

        label = category_label(record)
        by_category[label] = by_category.get(label, ZERO) + amount

        day = to_date(record.get("date"))
        if day is None or not in_trend_window(day, now):
            continue
        by_day[day] = by_day.get(day, ZERO) + amount
    return ExpenseAggregate(total=total, by_category=by_category, by_day=by_day)
