"""Transaction management commands."""

import dataclasses

import click
from cashbook.cli.date_filters import describe_window, resolve_cli_time_window, window_options
from cashbook.cli.display import print_balance, print_transaction_detail, print_transaction_table
from cashbook.cli.error_handling import handle_domain_error, load_transactions
from cashbook.domain.aggregation import compute_balance
from cashbook.domain.entities import TimeRange, TransactionType
from cashbook.domain.errors import DomainError
from cashbook.domain.filters import apply_filters
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@window_options
@click.option("--search", "query", help="Match category, note, amount or date (case-insensitive)")
@click.pass_context
def list_transactions(
    ctx,
    this_month: bool,
    this_year: bool,
    all_time: bool,
    start_date: str | None,
    end_date: str | None,
    query: str | None,
):
    """List transactions in a time window (default: this month).

    The search text is matched against the category, the note, the amount and
    the date as shown in the list (e.g. 2024/1/15).
    """
    service = TransactionService(ctx.obj["store"])

    window = resolve_cli_time_window(
        ctx,
        start_date=start_date,
        end_date=end_date,
        this_month=this_month,
        this_year=this_year,
        all_time=all_time,
        default_mode=TimeRange.MONTH,
    )

    in_window = apply_filters(load_transactions(ctx, service), window=window)
    matches = apply_filters(in_window, query=query)

    click.echo(f"\nPeriod: {describe_window(window)}")
    print_balance(compute_balance(in_window))

    if not matches:
        click.echo("\nNo transactions found.")
        return

    click.echo(f"\nFound {len(matches)} transaction(s):")
    print_transaction_table(matches)


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str) -> None:
    """Show one transaction."""
    service = TransactionService(ctx.obj["store"])
    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_transaction_detail(txn)


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Income or expense",
)
@click.option("--amount", help="Amount, a positive number (e.g., 123.45)")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Expense category")
@click.option("--note", help="Free-text note")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    txn_type: str | None,
    amount: str | None,
    date: str | None,
    category: str | None,
    note: str | None,
) -> None:
    """Update a transaction.

    The current values are kept for every option that is not provided.

    Examples:
        cashbook transaction update 1705312800000 --amount 75
        cashbook transaction update 1705312800000 --type expense --category network
    """
    service = TransactionService(ctx.obj["store"])

    try:
        form = service.form_for(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    changes = {}
    if txn_type is not None:
        changes["type"] = TransactionType(txn_type.lower())

    if amount is not None:
        try:
            changes["amount"] = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    if date is not None:
        try:
            changes["date"] = parse_date(date).isoformat()
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    if category is not None:
        changes["category"] = category
    if note is not None:
        changes["note"] = note

    try:
        txn = service.update_transaction(transaction_id, dataclasses.replace(form, **changes))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")
    print_transaction_detail(txn)


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        cashbook transaction delete 1705312800000
    """
    service = TransactionService(ctx.obj["store"])

    try:
        service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_transactions(ctx, yes: bool) -> None:
    """Delete ALL transactions. This cannot be undone."""
    service = TransactionService(ctx.obj["store"])

    if not yes and not click.confirm(
        "Are you sure you want to clear all transaction data? This cannot be undone!"
    ):
        click.echo("Clear cancelled.")
        return

    try:
        count = service.clear_transactions()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Cleared {count} transaction(s)")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
