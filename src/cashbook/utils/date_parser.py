"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            days_since_monday = today.weekday()
            return today - timedelta(days=days_since_monday + 7)
        elif period in WEEKDAYS:
            target_day = WEEKDAYS.index(period)
            days_ago = (today.weekday() - target_day) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_record_date(value: Optional[str]) -> Optional[date]:
    """Parse the ISO date stored on a transaction.

    Stored dates come from outside the form's control, so anything that is
    not an ISO calendar date yields None instead of raising.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, TypeError, OverflowError):
        return None


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` calendar date, returning None for anything else."""
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def format_display_date(value: date) -> str:
    """Format a date the way the records list shows it, e.g. ``2024/1/15``."""
    return f"{value.year}/{value.month}/{value.day}"


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get the full calendar range containing today for a period.

    Args:
        period: One of day, week, month, year
        today: Reference date (defaults to the local current date)

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if today is None:
        today = date.today()

    if period == "day":
        return (today, today)

    elif period == "week":
        # Monday through Sunday
        start_date = today - timedelta(days=today.weekday())
        return (start_date, start_date + timedelta(days=6))

    elif period == "month":
        start_date = today.replace(day=1)
        # Last day of the month (day before the first day of next month)
        end_date = start_date + relativedelta(months=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "year":
        return (today.replace(month=1, day=1), today.replace(month=12, day=31))

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: day, week, month, year"
        )
