"""Report command: expense bars per period and per-category totals."""

import click
from cashbook.cli.error_handling import load_transactions
from cashbook.domain.aggregation import compute_category_stats
from cashbook.domain.categorizer import DEFAULT_CATEGORIES
from cashbook.domain.entities import ReportPeriod
from cashbook.domain.report import compute_period_report
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import format_money

BAR_WIDTH = 30


def render_bar(value, maximum) -> str:
    """Scale a value to a text bar."""
    if maximum <= 0:
        return ""
    return "#" * int(value / maximum * BAR_WIDTH)


@click.command("report")
@click.option(
    "--period",
    type=click.Choice([p.value for p in ReportPeriod], case_sensitive=False),
    default=ReportPeriod.MONTH.value,
    show_default=True,
    help="Report period containing today",
)
@click.option(
    "--by-category",
    is_flag=True,
    help="Show income and expense for every category instead of period bars",
)
@click.pass_context
def report(ctx, period: str, by_category: bool):
    """Show expense statistics."""
    service = TransactionService(ctx.obj["store"])
    transactions = load_transactions(ctx, service)

    if by_category:
        click.echo("\nCategory Statistics")
        click.echo("-" * 60)
        click.echo(f"{'Category':<24} {'Income':>16} {'Expense':>16}")
        click.echo("-" * 60)
        for stats in compute_category_stats(transactions, DEFAULT_CATEGORIES):
            click.echo(
                f"{stats.category:<24} {format_money(stats.income):>16} {format_money(stats.expense):>16}"
            )
        return

    bars = compute_period_report(transactions, period)
    click.echo(f"\nExpense Report ({period})")
    click.echo("-" * 60)
    if not bars:
        click.echo("No expenses recorded.")
        return

    maximum = max(bar.value for bar in bars)
    for bar in bars:
        click.echo(f"{bar.name:<16} {format_money(bar.value):>14} {render_bar(bar.value, maximum)}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
