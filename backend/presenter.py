from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Tuple

from backend.constants import CATEGORY_COLORS, DEFAULT_CATEGORY_COLOR
from backend.metrics import ExpenseAggregate

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class CategoryTotal:
    label: str
    value: Decimal
    color: str


@dataclass(frozen=True)
class DailyTrendPoint:
    label: str
    value: Decimal
    day: date


@dataclass(frozen=True)
class DashboardSummary:
    total_monthly_expense: Decimal
    pending_todo_count: int
    active_entertainment_count: int


@dataclass(frozen=True)
class OverviewPresentation:
    summary: DashboardSummary
    category_series: Tuple[CategoryTotal, ...]
    trend_series: Tuple[DailyTrendPoint, ...]

    @property
    def show_category_chart(self) -> bool:
        return bool(self.category_series)

    @property
    def show_trend_chart(self) -> bool:
        return bool(self.trend_series)


def round_currency(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def category_color(label: str) -> str:
    return CATEGORY_COLORS.get(label, DEFAULT_CATEGORY_COLOR)


def format_day_label(day: date) -> str:
    """Short month plus day of month, e.g. ``Jan 5``."""
    return f"{day.strftime('%b')} {day.day}"


def build_category_series(aggregate: ExpenseAggregate) -> Tuple[CategoryTotal, ...]:
    return tuple(
        CategoryTotal(label=label, value=round_currency(amount), color=category_color(label))
        for label, amount in aggregate.by_category.items()
    )


def build_trend_series(aggregate: ExpenseAggregate) -> Tuple[DailyTrendPoint, ...]:
    return tuple(
        DailyTrendPoint(label=format_day_label(day), value=round_currency(amount), day=day)
        for day, amount in aggregate.by_day.items()
    )


def present_overview(
    aggregate: ExpenseAggregate,
    pending_todos: Sequence[dict],
    active_entertainment: Sequence[dict],
) -> OverviewPresentation:
    summary = DashboardSummary(
        total_monthly_expense=round_currency(aggregate.total),
        pending_todo_count=len(pending_todos),
        active_entertainment_count=len(active_entertainment),
    )
    return OverviewPresentation(
        summary=summary,
        category_series=build_category_series(aggregate),
        trend_series=build_trend_series(aggregate),
    )
