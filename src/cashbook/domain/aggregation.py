"""Aggregation of transactions into balances, breakdowns and trends.

Every function here is pure: it takes a sequence of transactions (already
windowed by the caller where that matters) and returns new value objects.
"""

from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from cashbook.domain.categorizer import FALLBACK_CATEGORY
from cashbook.domain.entities import (
    BalanceSummary,
    CategoryBreakdown,
    CategoryStats,
    MonthlyTrend,
    Transaction,
    TransactionStats,
)
from cashbook.utils.date_parser import parse_record_date

ZERO = Decimal("0")
ONE_DECIMAL = Decimal("0.1")


def sum_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all positive amounts."""
    return sum((txn.amount for txn in transactions if txn.amount > 0), ZERO)


def sum_expense(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of the magnitudes of all negative amounts."""
    return sum((-txn.amount for txn in transactions if txn.amount < 0), ZERO)


def compute_balance(transactions: Sequence[Transaction]) -> BalanceSummary:
    """Compute income, expense and balance totals.

    Args:
        transactions: Transactions to total

    Returns:
        BalanceSummary where expense is a non-negative magnitude and
        balance = income - expense
    """
    income = sum_income(transactions)
    expense = sum_expense(transactions)
    return BalanceSummary(income=income, expense=expense, balance=income - expense)


def format_percentage(part: Decimal, total: Decimal) -> str:
    """Format part/total as a one-decimal percentage string.

    A zero total gives ``0.0%``.
    """
    if total == 0:
        return f"{ZERO:.1f}%"
    share = (part / total * 100).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return f"{share}%"


def compute_transaction_stats(transactions: Sequence[Transaction]) -> TransactionStats:
    """Count income and expense records and find the largest of each.

    The largest expense is a magnitude. Both maxima are zero when there is
    no record of that kind.
    """
    incomes = [txn.amount for txn in transactions if txn.amount > 0]
    expenses = [-txn.amount for txn in transactions if txn.amount < 0]
    return TransactionStats(
        transaction_count=len(transactions),
        income_count=len(incomes),
        expense_count=len(expenses),
        max_income=max(incomes, default=ZERO),
        max_expense=max(expenses, default=ZERO),
    )


def compute_category_breakdown(transactions: Sequence[Transaction]) -> list[CategoryBreakdown]:
    """Break expenses down by category.

    Only expenses are considered. Transactions without a category are counted
    under the fallback category. Entries are sorted by amount, largest first;
    equal amounts keep the order in which their category first appeared.
    """
    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.amount >= 0:
            continue
        category = txn.category or FALLBACK_CATEGORY
        totals[category] = totals.get(category, ZERO) + abs(txn.amount)

    total_expense = sum(totals.values(), ZERO)
    breakdown = [
        CategoryBreakdown(
            category=category,
            amount=amount,
            percentage=format_percentage(amount, total_expense),
        )
        for category, amount in totals.items()
    ]
    breakdown.sort(key=lambda entry: entry.amount, reverse=True)
    return breakdown


def compute_monthly_trend(transactions: Sequence[Transaction]) -> list[MonthlyTrend]:
    """Total income and expense per calendar month.

    Transactions whose date cannot be parsed are left out. The result is
    ordered by month, oldest first.
    """
    monthly: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {"income": ZERO, "expense": ZERO}
    )

    for txn in transactions:
        txn_date = parse_record_date(txn.date)
        if txn_date is None:
            continue
        bucket = monthly[txn_date.strftime("%Y-%m")]
        if txn.amount > 0:
            bucket["income"] += txn.amount
        else:
            bucket["expense"] += abs(txn.amount)

    return [
        MonthlyTrend(month=month, income=data["income"], expense=data["expense"])
        for month, data in sorted(monthly.items())
    ]


def compute_category_stats(
    transactions: Sequence[Transaction], categories: Sequence[str]
) -> list[CategoryStats]:
    """Income and expense recorded against each category, in the given order.

    Only exact category matches count; uncategorized records are not folded
    into any entry.
    """
    stats = []
    for category in categories:
        matching = [txn for txn in transactions if txn.category == category]
        stats.append(
            CategoryStats(
                category=category,
                income=sum_income(matching),
                expense=sum_expense(matching),
            )
        )
    return stats
