"""Transaction management commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.errors import DomainError, transaction_not_found
from finboard.domain.transaction import TransactionService
from finboard.utils.date_parser import parse_date
from finboard.utils.amount_parser import parse_amount
from finboard.utils.money import format_currency


def _service(ctx) -> TransactionService:
    return TransactionService(ctx.obj["db"], ctx.obj.get("actor_provider"))


@click.group("transaction")
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a single transaction."""
    try:
        txn = _service(ctx).get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if txn is None:
        click.echo(f"Error: {transaction_not_found(transaction_id)}", err=True)
        ctx.exit(1)

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Amount: {format_currency(txn.amount)}")
    click.echo(f"  Description: {txn.description or '-'}")
    click.echo(f"  Created: {txn.created_at}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["Income", "Expense"], case_sensitive=False),
    help="Transaction type",
)
@click.option("--category", help="Category")
@click.option("--amount", help="Positive transaction amount (e.g., 123.45)")
@click.option("--description", help="Transaction description, or empty string to clear")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    date: str | None,
    txn_type: str | None,
    category: str | None,
    amount: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --description "" to clear
    the description.

    Examples:
        finboard transaction update 1 --amount 75.00
        finboard transaction update 1 --type Expense --category Rent
        finboard transaction update 1 --description ""  # Clear description
    """
    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    clear_description = description is not None and description.strip() == ""

    try:
        _service(ctx).update_transaction(
            transaction_id,
            date=txn_date,
            type=txn_type,
            category=category,
            amount=txn_amount,
            description=None if clear_description else description,
            clear_description=clear_description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction."""
    if not yes:
        click.confirm(f"Delete transaction {transaction_id}?", abort=True)

    try:
        _service(ctx).delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
