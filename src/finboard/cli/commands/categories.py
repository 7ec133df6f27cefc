"""Suggested category listing command."""

import click
from finboard.domain.categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES


@click.command("categories")
def list_categories():
    """List suggested income and expense categories."""
    for heading, names in (("Income", INCOME_CATEGORIES), ("Expense", EXPENSE_CATEGORIES)):
        click.echo(heading)
        click.echo("*" * 40)
        for name in names:
            click.echo(f"    {name}")
        click.echo()


def register_commands(cli):
    """Register categories command with main CLI."""
    cli.add_command(list_categories)
