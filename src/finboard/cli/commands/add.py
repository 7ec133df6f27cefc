"""Add transaction command."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.categories import suggested_categories
from finboard.domain.errors import DomainError
from finboard.domain.transaction import TransactionService
from finboard.utils.date_parser import parse_date
from finboard.utils.amount_parser import parse_amount
from finboard.utils.money import format_currency


@click.command("add")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "txn_type",
    required=True,
    type=click.Choice(["Income", "Expense"], case_sensitive=False),
    help="Transaction type",
)
@click.option("--category", required=True, help="Category (e.g., 'Client Payment', 'Rent')")
@click.option("--amount", required=True, help="Positive transaction amount (e.g., 123.45)")
@click.option("--description", help="Transaction description (at least 3 characters)")
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    txn_type: str,
    category: str,
    amount: str,
    description: str | None,
):
    """Add a transaction.

    Examples:
        finboard add --date 2025-01-15 --type Income --category "Client Payment" --amount 1000
        finboard add --date today --type Expense --category Rent --amount 400 --description "January rent"
    """
    db = ctx.obj["db"]
    service = TransactionService(db, ctx.obj.get("actor_provider"))

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            date=txn_date,
            type=txn_type,
            category=category,
            amount=txn_amount,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Amount: {format_currency(txn.amount)}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if txn.category not in suggested_categories(txn.type):
        click.echo(f"  Note: '{txn.category}' is not one of the suggested {txn.type.value.lower()} categories")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
