"""Shared console rendering for transactions and summaries."""

from typing import Sequence

import click

from cashbook.domain.entities import BalanceSummary, Transaction
from cashbook.domain.categorizer import FALLBACK_CATEGORY
from cashbook.utils.amount_parser import format_money


def format_signed(amount) -> str:
    """Render an amount with an explicit direction, e.g. ``+¥10.00`` / ``-¥5.00``."""
    sign = "+" if amount > 0 else "-"
    return f"{sign}{format_money(abs(amount))}"


def print_transaction_detail(txn: Transaction) -> None:
    """Print every field of one transaction."""
    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {'income' if txn.is_income else 'expense'}")
    click.echo(f"  Amount: {format_signed(txn.amount)}")
    if txn.is_expense:
        click.echo(f"  Category: {txn.category or FALLBACK_CATEGORY}")
    if txn.note:
        click.echo(f"  Note: {txn.note}")


def print_transaction_table(transactions: Sequence[Transaction]) -> None:
    """Print transactions as a compact table."""
    click.echo("-" * 100)
    click.echo(f"{'ID':<15} {'Date':<12} {'Amount':>14}  {'Category':<20} {'Note':<35}")
    click.echo("-" * 100)
    for txn in transactions:
        category = txn.category if txn.is_income else (txn.category or FALLBACK_CATEGORY)
        note = (txn.note or "")[:35]
        click.echo(
            f"{txn.id:<15} {txn.date:<12} {format_signed(txn.amount):>14}  {category:<20} {note:<35}"
        )


def print_balance(summary: BalanceSummary) -> None:
    """Print income, expense and balance totals."""
    click.echo(f"  Income:  {format_money(summary.income)}")
    click.echo(f"  Expense: {format_money(summary.expense)}")
    click.echo(f"  Balance: {format_money(summary.balance)}")
