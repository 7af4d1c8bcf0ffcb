"""Time window and text search filters over transactions."""

from datetime import date, timedelta
from typing import Optional, Sequence, Union

from cashbook.domain.entities import TimeRange, TimeWindow, Transaction
from cashbook.utils.amount_parser import format_plain_amount
from cashbook.utils.date_parser import format_display_date, get_date_range, parse_record_date

# Custom ranges default to the last 30 days
DEFAULT_CUSTOM_DAYS = 30


def resolve_time_window(
    mode: Union[TimeRange, str],
    today: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> TimeWindow:
    """Resolve a time range mode to a concrete inclusive window.

    Args:
        mode: month, year or custom
        today: Reference date for month/year and custom defaults
        start: Custom range start (defaults to today minus 30 days)
        end: Custom range end (defaults to today)

    Returns:
        TimeWindow; a custom window with start after end is empty

    Raises:
        ValueError: If mode is not a known time range
    """
    mode = TimeRange(mode)
    if today is None:
        today = date.today()

    if mode == TimeRange.MONTH:
        return TimeWindow(*get_date_range("month", today))
    if mode == TimeRange.YEAR:
        return TimeWindow(*get_date_range("year", today))

    if start is None:
        start = today - timedelta(days=DEFAULT_CUSTOM_DAYS)
    if end is None:
        end = today
    return TimeWindow(start=start, end=end)


def in_window(txn: Transaction, window: TimeWindow) -> bool:
    """Check whether a transaction's date lies inside the window.

    Transactions with unparsable dates are never inside a window.
    """
    txn_date = parse_record_date(txn.date)
    return txn_date is not None and window.contains(txn_date)


def filter_by_window(
    transactions: Sequence[Transaction], window: TimeWindow
) -> list[Transaction]:
    """Keep the transactions dated inside the window."""
    if window.is_empty:
        return []
    return [txn for txn in transactions if in_window(txn, window)]


def search_fields(txn: Transaction) -> tuple[str, ...]:
    """Return the derived text fields a search query is tested against."""
    txn_date = parse_record_date(txn.date)
    display_date = format_display_date(txn_date) if txn_date else (txn.date or "")
    return (
        txn.category or "",
        txn.note or "",
        format_plain_amount(txn.amount),
        display_date,
    )


def matches_query(txn: Transaction, query: Optional[str]) -> bool:
    """Case-insensitive substring match of query against any search field."""
    if query is None or not query.strip():
        return True
    needle = query.lower()
    return any(needle in field.lower() for field in search_fields(txn))


def search_transactions(
    transactions: Sequence[Transaction], query: Optional[str]
) -> list[Transaction]:
    """Keep the transactions matching a free-text query. Empty query keeps all."""
    return [txn for txn in transactions if matches_query(txn, query)]


def apply_filters(
    transactions: Sequence[Transaction],
    window: Optional[TimeWindow] = None,
    query: Optional[str] = None,
) -> list[Transaction]:
    """Apply the time window, then the text search on what remains."""
    if window is not None:
        transactions = filter_by_window(transactions, window)
    return search_transactions(transactions, query)
