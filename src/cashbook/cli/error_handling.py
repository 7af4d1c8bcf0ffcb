"""CLI error handling helpers."""

import click

from cashbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def load_transactions(ctx: click.Context, service) -> list:
    """Load every transaction, exiting with an error if storage can't be read."""
    try:
        return service.list_transactions()
    except DomainError as e:
        handle_domain_error(ctx, e)
