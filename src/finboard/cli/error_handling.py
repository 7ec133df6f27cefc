"""CLI error handling helpers."""

import click

from finboard.domain.errors import DomainError, StoreError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, StoreError):
        click.echo("The data store could not complete the request. Please try again.", err=True)
    ctx.exit(1)
