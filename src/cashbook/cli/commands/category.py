"""Category commands."""

import click
from cashbook.domain.categorizer import DEFAULT_CATEGORIES, suggest_categories


@click.group()
def category_group():
    """Expense categories."""
    pass


@category_group.command("list")
def list_categories():
    """List the expense categories."""
    click.echo("\nCategories:")
    for name in DEFAULT_CATEGORIES:
        click.echo(f"  {name}")


@category_group.command("suggest")
@click.argument("note")
def suggest(note: str):
    """Suggest categories for a note.

    Examples:
        cashbook category suggest "network fee for the exhibition"
    """
    suggestion = suggest_categories(note)
    if suggestion.selected is not None:
        click.echo(f"Category: {suggestion.selected}")
    elif suggestion.matches:
        click.echo(f"Possible categories: {', '.join(suggestion.matches)}")
    else:
        click.echo("No matching category.")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
