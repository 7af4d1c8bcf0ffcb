"""Add transaction command."""

import click
from datetime import date as date_cls
from cashbook.cli.display import print_transaction_detail
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.categorizer import suggest_categories
from cashbook.domain.entities import TransactionForm, TransactionType
from cashbook.domain.errors import DomainError
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.date_parser import parse_date


def resolve_category(note: str | None, category: str | None) -> tuple[str | None, tuple[str, ...]]:
    """Pick the category for an expense, suggesting one from the note when omitted.

    Returns:
        Tuple of (category to save, suggestions to show)
    """
    if category:
        return category, ()
    suggestion = suggest_categories(note)
    if suggestion.selected is not None:
        return suggestion.selected, ()
    return None, suggestion.matches


@click.command("add")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default=TransactionType.EXPENSE.value,
    show_default=True,
    help="Income or expense",
)
@click.option("--amount", required=True, help="Amount, a positive number (e.g., 123.45)")
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'; default: today)",
)
@click.option("--category", help="Expense category (see 'cashbook category list')")
@click.option("--note", help="Free-text note; used to suggest a category")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    date: str | None,
    category: str | None,
    note: str | None,
):
    """Record an income or expense.

    Examples:
        cashbook add --type expense --amount 50 --note "network bill" --date 2024-01-15
        cashbook add --type income --amount 8000 --note "January salary"
    """
    service = TransactionService(ctx.obj["store"])

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    txn_date = date_cls.today()
    if date:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    suggestions: tuple[str, ...] = ()
    if txn_type == TransactionType.EXPENSE.value:
        category, suggestions = resolve_category(note, category)

    form = TransactionForm(
        amount=txn_amount,
        type=TransactionType(txn_type.lower()),
        date=txn_date.isoformat(),
        category=category,
        note=note,
    )

    try:
        txn = service.create_transaction(form)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Transaction saved")
    print_transaction_detail(txn)
    if suggestions:
        click.echo(f"Suggested categories: {', '.join(suggestions)}")
        click.echo(f"  Set one with: cashbook transaction update {txn.id} --category <name>")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
