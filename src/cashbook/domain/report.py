"""Report domain: dashboard overview, report bar series and CSV export."""

import csv
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, TextIO, Union

from cashbook.domain.aggregation import (
    ZERO,
    compute_balance,
    compute_category_breakdown,
    compute_monthly_trend,
    compute_transaction_stats,
)
from cashbook.domain.categorizer import FALLBACK_CATEGORY
from cashbook.domain.entities import (
    FinancialOverview,
    ReportBar,
    ReportPeriod,
    TimeWindow,
    Transaction,
)
from cashbook.domain.filters import filter_by_window
from cashbook.domain.transaction import split_amount
from cashbook.utils.date_parser import get_date_range, parse_record_date

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
EXPORT_COLUMNS = ("id", "date", "type", "amount", "category", "note")


def build_overview(
    transactions: Sequence[Transaction], window: Optional[TimeWindow] = None
) -> FinancialOverview:
    """Build the dashboard view model from a snapshot of the records.

    Args:
        transactions: Every stored transaction
        window: Optional window to restrict the overview to

    Returns:
        FinancialOverview with totals, category breakdown, monthly trend and
        record statistics
    """
    if window is not None:
        transactions = filter_by_window(transactions, window)
    return FinancialOverview(
        summary=compute_balance(transactions),
        category_breakdown=tuple(compute_category_breakdown(transactions)),
        monthly_trend=tuple(compute_monthly_trend(transactions)),
        window=window,
        stats=compute_transaction_stats(transactions),
    )


def _dated_expenses(
    transactions: Sequence[Transaction], window: TimeWindow
) -> list[tuple[date, Transaction]]:
    dated = []
    for txn in transactions:
        if txn.amount >= 0:
            continue
        txn_date = parse_record_date(txn.date)
        if txn_date is not None and window.contains(txn_date):
            dated.append((txn_date, txn))
    return dated


def compute_period_report(
    transactions: Sequence[Transaction],
    period: Union[ReportPeriod, str],
    today: Optional[date] = None,
) -> list[ReportBar]:
    """Build expense bars for the period containing today.

    - day: today's expenses by category
    - week: one bar per weekday, Monday to Sunday
    - month: one bar per week of the month (days 1-7 are week 1)
    - year: one bar per calendar month

    Bars with no expenses are kept for week, month and year so the axis is
    complete.

    Raises:
        ValueError: If period is not a known report period
    """
    period = ReportPeriod(period)
    if today is None:
        today = date.today()
    window = TimeWindow(*get_date_range(period.value, today))
    expenses = _dated_expenses(transactions, window)

    if period == ReportPeriod.DAY:
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for _, txn in expenses:
            totals[txn.category or FALLBACK_CATEGORY] += abs(txn.amount)
        bars = [ReportBar(name=name, value=value) for name, value in totals.items()]
        bars.sort(key=lambda bar: bar.value, reverse=True)
        return bars

    if period == ReportPeriod.WEEK:
        labels = list(WEEKDAY_LABELS)

        def bucket(value: date) -> int:
            return value.weekday()

    elif period == ReportPeriod.MONTH:
        weeks = (window.end.day + 6) // 7
        labels = [f"Week {number}" for number in range(1, weeks + 1)]

        def bucket(value: date) -> int:
            return (value.day - 1) // 7

    else:
        labels = list(MONTH_LABELS)

        def bucket(value: date) -> int:
            return value.month - 1

    values = [ZERO] * len(labels)
    for txn_date, txn in expenses:
        values[bucket(txn_date)] += abs(txn.amount)
    return [ReportBar(name=label, value=value) for label, value in zip(labels, values)]


def export_transactions_csv(transactions: Sequence[Transaction], stream: TextIO) -> int:
    """Write transactions as CSV with the amount split into type and magnitude.

    Returns:
        Number of data rows written
    """
    writer = csv.writer(stream)
    writer.writerow(EXPORT_COLUMNS)
    for txn in transactions:
        txn_type, magnitude = split_amount(txn.amount)
        writer.writerow(
            [txn.id, txn.date, txn_type.value, f"{magnitude:.2f}", txn.category, txn.note]
        )
    return len(transactions)

