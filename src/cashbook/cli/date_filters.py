"""CLI helpers for time window resolution."""

from datetime import date
from typing import Optional

import click

from cashbook.domain.entities import TimeRange, TimeWindow
from cashbook.domain.filters import resolve_time_window
from cashbook.utils.date_parser import parse_date


def window_options(command):
    """Attach the shared time window options to a command."""
    options = [
        click.option("--this-month", is_flag=True, help="Current calendar month"),
        click.option("--this-year", is_flag=True, help="Current calendar year"),
        click.option("--all-time", is_flag=True, help="Do not restrict by date"),
        click.option(
            "--start-date",
            help="Custom range start (YYYY-MM-DD or relative like 'last month'; default: 30 days ago)",
        ),
        click.option(
            "--end-date",
            help="Custom range end (YYYY-MM-DD or relative like 'today'; default: today)",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def resolve_cli_time_window(
    ctx,
    *,
    start_date: Optional[str],
    end_date: Optional[str],
    this_month: bool = False,
    this_year: bool = False,
    all_time: bool = False,
    default_mode: Optional[TimeRange] = None,
    today: Optional[date] = None,
) -> Optional[TimeWindow]:
    """Resolve the time window from period flags or explicit dates.

    Returns None when no window applies (all time).
    """
    period_count = sum(1 for is_set in (this_month, this_year, all_time) if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --all-time) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, --all-time) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if all_time:
        return None
    if this_month:
        return resolve_time_window(TimeRange.MONTH, today=today)
    if this_year:
        return resolve_time_window(TimeRange.YEAR, today=today)

    if start_date or end_date:
        start = None
        end = None
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

        return resolve_time_window(TimeRange.CUSTOM, today=today, start=start, end=end)

    if default_mode is not None:
        return resolve_time_window(default_mode, today=today)
    return None


def describe_window(window: Optional[TimeWindow]) -> str:
    """Human readable label for a window."""
    if window is None:
        return "all time"
    return f"{window.start.isoformat()} to {window.end.isoformat()}"
