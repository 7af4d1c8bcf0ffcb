"""Summary command: the dashboard overview."""

import json

import click
from cashbook.cli.date_filters import describe_window, resolve_cli_time_window, window_options
from cashbook.cli.display import print_balance
from cashbook.cli.error_handling import load_transactions
from cashbook.domain.entities import FinancialOverview
from cashbook.domain.report import build_overview
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import format_money


def overview_to_dict(overview: FinancialOverview) -> dict:
    """Convert an overview into the chart data shapes."""
    window = None
    if overview.window is not None:
        window = {
            "start": overview.window.start.isoformat(),
            "end": overview.window.end.isoformat(),
        }
    return {
        "window": window,
        "income": overview.summary.income,
        "expense": overview.summary.expense,
        "balance": overview.summary.balance,
        "category_data": [entry.to_chart_dict() for entry in overview.category_breakdown],
        "trend_data": [entry.to_chart_dict() for entry in overview.monthly_trend],
        "stats": {
            "transaction_count": overview.stats.transaction_count,
            "income_count": overview.stats.income_count,
            "expense_count": overview.stats.expense_count,
            "max_income": overview.stats.max_income,
            "max_expense": overview.stats.max_expense,
        },
    }


def _json_default(value):
    # Decimal amounts render as plain numbers
    return float(value)


def print_overview(overview: FinancialOverview) -> None:
    """Print the overview as text."""
    click.echo(f"\nFinancial Overview ({describe_window(overview.window)})")
    click.echo("=" * 60)
    print_balance(overview.summary)

    click.echo("\nWhere the money went")
    click.echo("-" * 60)
    if overview.category_breakdown:
        for entry in overview.category_breakdown:
            click.echo(
                f"  {entry.category:<30} {format_money(entry.amount):>16} {entry.percentage:>8}"
            )
    else:
        click.echo("  No expenses recorded.")

    click.echo("\nMonthly trend")
    click.echo("-" * 60)
    if overview.monthly_trend:
        click.echo(f"  {'Month':<10} {'Income':>16} {'Expense':>16} {'Net':>16}")
        for entry in overview.monthly_trend:
            net = entry.income - entry.expense
            click.echo(
                f"  {entry.month:<10} {format_money(entry.income):>16} "
                f"{format_money(entry.expense):>16} {format_money(net):>16}"
            )
    else:
        click.echo("  No dated transactions.")

    stats = overview.stats
    click.echo("\nDetails")
    click.echo("-" * 60)
    click.echo(f"  Transactions:         {stats.transaction_count}")
    click.echo(f"  Income transactions:  {stats.income_count}")
    click.echo(f"  Expense transactions: {stats.expense_count}")
    if stats.transaction_count:
        click.echo(f"  Largest income:       {format_money(stats.max_income)}")
        click.echo(f"  Largest expense:      {format_money(stats.max_expense)}")


@click.command("summary")
@window_options
@click.option("--json", "as_json", is_flag=True, help="Print chart data as JSON")
@click.pass_context
def summary(
    ctx,
    this_month: bool,
    this_year: bool,
    all_time: bool,
    start_date: str | None,
    end_date: str | None,
    as_json: bool,
):
    """Show balance, category breakdown, monthly trend and record statistics (default: all time)."""
    service = TransactionService(ctx.obj["store"])

    window = resolve_cli_time_window(
        ctx,
        start_date=start_date,
        end_date=end_date,
        this_month=this_month,
        this_year=this_year,
        all_time=all_time,
    )
    overview = build_overview(load_transactions(ctx, service), window=window)

    if as_json:
        click.echo(
            json.dumps(overview_to_dict(overview), default=_json_default, ensure_ascii=False, indent=2)
        )
        return

    print_overview(overview)


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
