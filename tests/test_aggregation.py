"""Tests for the aggregation engine."""

from decimal import Decimal

import pytest

from cashbook.domain.aggregation import (
    compute_balance,
    compute_category_breakdown,
    compute_category_stats,
    compute_monthly_trend,
    format_percentage,
)
from cashbook.domain.entities import BalanceSummary, MonthlyTrend, Transaction


def _txn(txn_id, amount, date="2024-01-15", category="", note=""):
    return Transaction(id=txn_id, amount=Decimal(amount), date=date, category=category, note=note)


def test_empty_input_yields_zeros():
    """Test every aggregate of an empty ledger is empty or zero."""
    assert compute_balance([]) == BalanceSummary(
        income=Decimal("0"), expense=Decimal("0"), balance=Decimal("0")
    )
    assert compute_category_breakdown([]) == []
    assert compute_monthly_trend([]) == []


def test_compute_balance(sample_transactions):
    """Test income, expense and balance totals."""
    summary = compute_balance(sample_transactions)

    assert summary.income == Decimal("8500")
    assert summary.expense == Decimal("540.00")
    assert summary.balance == Decimal("7960.00")


@pytest.mark.parametrize(
    "amounts",
    [
        ["10", "-3"],
        ["-1", "-2", "-3"],
        ["0.01", "-0.02", "99.99"],
        ["100"],
    ],
)
def test_balance_is_income_minus_expense(amounts):
    """Test the balance identity and non-negative totals."""
    summary = compute_balance([_txn(str(i), a) for i, a in enumerate(amounts)])

    assert summary.balance == summary.income - summary.expense
    assert summary.income >= 0
    assert summary.expense >= 0


def test_breakdown_only_counts_expenses(sample_transactions):
    """Test income is left out of the category breakdown."""
    breakdown = compute_category_breakdown(sample_transactions)

    categories = [entry.category for entry in breakdown]
    assert categories == ["office-expense", "network", "other"]
    amounts = {entry.category: entry.amount for entry in breakdown}
    assert amounts["network"] == Decimal("200.00")
    assert amounts["office-expense"] == Decimal("300")
    assert amounts["other"] == Decimal("40")


def test_breakdown_missing_category_folds_to_other():
    """Test uncategorized expenses are reported as 'other'."""
    breakdown = compute_category_breakdown(
        [_txn("1", "-10"), _txn("2", "-5", category="other")]
    )

    assert len(breakdown) == 1
    assert breakdown[0].category == "other"
    assert breakdown[0].amount == Decimal("15")
    assert breakdown[0].percentage == "100.0%"


def test_breakdown_percentages():
    """Test percentages are one-decimal strings that sum to about 100%."""
    breakdown = compute_category_breakdown(
        [
            _txn("1", "-1", category="tax"),
            _txn("2", "-1", category="network"),
            _txn("3", "-1", category="finance"),
        ]
    )

    assert [entry.percentage for entry in breakdown] == ["33.3%", "33.3%", "33.3%"]
    total = sum(Decimal(entry.percentage.rstrip("%")) for entry in breakdown)
    assert abs(total - Decimal("100")) <= Decimal("0.2")


def test_breakdown_ties_keep_first_occurrence_order():
    """Test equal amounts keep the order their categories first appeared in."""
    breakdown = compute_category_breakdown(
        [
            _txn("1", "-5", category="tax"),
            _txn("2", "-20", category="network"),
            _txn("3", "-5", category="finance"),
        ]
    )

    assert [entry.category for entry in breakdown] == ["network", "tax", "finance"]


def test_format_percentage_zero_total():
    """Test a zero total never divides and reports 0.0%."""
    assert format_percentage(Decimal("0"), Decimal("0")) == "0.0%"
    assert format_percentage(Decimal("5"), Decimal("0")) == "0.0%"


def test_format_percentage_rounds_half_up():
    """Test one-decimal rounding."""
    assert format_percentage(Decimal("1"), Decimal("8")) == "12.5%"
    assert format_percentage(Decimal("1"), Decimal("16")) == "6.3%"
    assert format_percentage(Decimal("2"), Decimal("3")) == "66.7%"


def test_breakdown_chart_shape():
    """Test the pie chart dictionary uses a 'name' key."""
    entry = compute_category_breakdown([_txn("1", "-10", category="tax")])[0]

    assert entry.to_chart_dict() == {
        "name": "tax",
        "amount": Decimal("10"),
        "percentage": "100.0%",
    }


def test_monthly_trend_sorted_by_month():
    """Test the documented trend example."""
    trend = compute_monthly_trend(
        [
            _txn("1", "100", date="2024-02-01"),
            _txn("2", "-50", date="2024-01-15"),
            _txn("3", "200", date="2024-01-20"),
        ]
    )

    assert trend == [
        MonthlyTrend(month="2024-01", income=Decimal("200"), expense=Decimal("50")),
        MonthlyTrend(month="2024-02", income=Decimal("100"), expense=Decimal("0")),
    ]


def test_monthly_trend_crosses_years():
    """Test months order chronologically across a year boundary."""
    trend = compute_monthly_trend(
        [
            _txn("1", "-1", date="2024-01-03"),
            _txn("2", "-1", date="2023-12-31"),
            _txn("3", "-1", date="2023-11-30"),
        ]
    )

    assert [entry.month for entry in trend] == ["2023-11", "2023-12", "2024-01"]


def test_unparsable_dates_skip_trend_but_count_in_balance():
    """Test bad dates are tolerated."""
    transactions = [
        _txn("1", "100", date="2024-03-01"),
        _txn("2", "-30", date="not a date"),
        _txn("3", "-20", date=""),
    ]

    trend = compute_monthly_trend(transactions)
    assert trend == [MonthlyTrend(month="2024-03", income=Decimal("100"), expense=Decimal("0"))]
    assert compute_balance(transactions).expense == Decimal("50")


def test_category_stats_exact_match_only(sample_transactions):
    """Test per-category stats cover every requested category in order."""
    stats = compute_category_stats(sample_transactions, ["network", "salary", "other"])

    assert [entry.category for entry in stats] == ["network", "salary", "other"]
    assert stats[0].expense == Decimal("200.00")
    assert stats[0].income == Decimal("0")
    assert stats[1].income == Decimal("0")
    # Uncategorized expenses are not folded into "other" here
    assert stats[2].expense == Decimal("0")
