"""Export command."""

import io

import click
from cashbook.cli.date_filters import resolve_cli_time_window, window_options
from cashbook.cli.error_handling import load_transactions
from cashbook.domain.filters import apply_filters
from cashbook.domain.report import export_transactions_csv
from cashbook.domain.transaction import TransactionService


@click.command("export")
@window_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Output CSV file (default: stdout)",
)
@click.pass_context
def export(
    ctx,
    this_month: bool,
    this_year: bool,
    all_time: bool,
    start_date: str | None,
    end_date: str | None,
    output: str | None,
):
    """Export transactions as CSV (default: all time)."""
    service = TransactionService(ctx.obj["store"])

    window = resolve_cli_time_window(
        ctx,
        start_date=start_date,
        end_date=end_date,
        this_month=this_month,
        this_year=this_year,
        all_time=all_time,
    )
    transactions = apply_filters(load_transactions(ctx, service), window=window)
    if output is None:
        buffer = io.StringIO()
        export_transactions_csv(transactions, buffer)
        click.echo(buffer.getvalue(), nl=False)
        return

    with open(output, "w", newline="", encoding="utf-8") as f:
        count = export_transactions_csv(transactions, f)
    click.echo(f"Exported {count} transaction(s) to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
