from dataclasses import replace
from datetime import date
from decimal import Decimal

from backend.constants import CATEGORY_COLORS, DEFAULT_CATEGORY_COLOR
from backend.metrics import ExpenseAggregate, aggregate_expenses
from backend.presenter import category_color, format_day_label, present_overview, round_currency
from factories import NOW, TODAY, days_ago, entertainment, expense, todo


def _aggregate(**overrides):
    base = ExpenseAggregate(total=Decimal("0"), by_category={}, by_day={})
    return replace(base, **overrides)


def test_empty_aggregate_gives_empty_series_and_zero_counts():
    presentation = present_overview(_aggregate(), [], [])

    assert presentation.summary.total_monthly_expense == Decimal("0.00")
    assert presentation.summary.pending_todo_count == 0
    assert presentation.summary.active_entertainment_count == 0
    assert presentation.category_series == ()
    assert presentation.trend_series == ()
    assert not presentation.show_category_chart
    assert not presentation.show_trend_chart


def test_values_are_rounded_only_for_display():
    aggregate = _aggregate(
        total=Decimal("10.005"),
        by_category={"Food": Decimal("10.005")},
        by_day={TODAY: Decimal("10.004")},
    )

    presentation = present_overview(aggregate, [], [])

    assert presentation.summary.total_monthly_expense == Decimal("10.01")
    assert presentation.category_series[0].value == Decimal("10.01")
    assert presentation.trend_series[0].value == Decimal("10.00")
    assert aggregate.total == Decimal("10.005")


def test_category_series_keeps_order_and_assigns_colors():
    aggregate = _aggregate(
        by_category={"Bills": Decimal("40"), "Food": Decimal("19.75"), "Crypto": Decimal("1")},
    )

    series = present_overview(aggregate, [], []).category_series

    assert [item.label for item in series] == ["Bills", "Food", "Crypto"]
    assert series[0].color == CATEGORY_COLORS["Bills"]
    assert series[1].color == CATEGORY_COLORS["Food"]
    assert series[2].color == DEFAULT_CATEGORY_COLOR


def test_category_color_is_total():
    for label in ["Food", "Transport", "Shopping", "Bills", "Entertainment", "Other"]:
        assert category_color(label) == CATEGORY_COLORS[label]
    assert category_color("") == DEFAULT_CATEGORY_COLOR
    assert category_color("food") == DEFAULT_CATEGORY_COLOR


def test_trend_series_keeps_aggregator_order_and_formats_labels():
    aggregate = _aggregate(
        by_day={date(2026, 10, 18): Decimal("3"), date(2026, 10, 5): Decimal("4")},
    )

    series = present_overview(aggregate, [], []).trend_series

    assert [point.label for point in series] == ["Oct 18", "Oct 5"]
    assert [point.day for point in series] == [date(2026, 10, 18), date(2026, 10, 5)]


def test_same_display_day_in_different_years_stays_separate():
    aggregate = _aggregate(
        by_day={date(2026, 1, 5): Decimal("1"), date(2027, 1, 5): Decimal("2")},
    )

    series = present_overview(aggregate, [], []).trend_series

    assert [point.label for point in series] == ["Jan 5", "Jan 5"]
    assert [point.value for point in series] == [Decimal("1.00"), Decimal("2.00")]


def test_counts_come_from_collections():
    todos = [todo(f"t{i}") for i in range(5)]
    active = [entertainment(f"e{i}", "game", "playing") for i in range(7)]

    summary = present_overview(_aggregate(), todos, active).summary

    assert summary.pending_todo_count == 5
    assert summary.active_entertainment_count == 7


def test_pipeline_is_idempotent_and_does_not_mutate_input():
    rows = (
        expense(Decimal("12.50"), "Food", TODAY),
        expense(Decimal("7.25"), "Food", TODAY, id="second-food"),
        expense(Decimal("40.00"), "Bills", days_ago(3)),
    )
    snapshot = [dict(row) for row in rows]

    first = present_overview(aggregate_expenses(rows, NOW), [], [])
    second = present_overview(aggregate_expenses(rows, NOW), [], [])

    assert first == second
    assert repr(first) == repr(second)
    assert [dict(row) for row in rows] == snapshot


def test_helpers():
    assert round_currency(Decimal("2.345")) == Decimal("2.35")
    assert format_day_label(date(2026, 1, 5)) == "Jan 5"
