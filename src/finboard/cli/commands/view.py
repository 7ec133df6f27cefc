"""Transaction viewing commands."""

import click
from finboard.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.errors import DomainError
from finboard.domain.transaction import DEFAULT_PAGE_SIZE, TransactionService
from finboard.utils.money import format_currency


@click.command("view")
@click.option("--search", help="Match description or category (case-insensitive)")
@click.option(
    "--type",
    "type_filter",
    type=click.Choice(["All", "Income", "Expense"], case_sensitive=False),
    default="All",
    show_default=True,
    help="Transaction type filter",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True, help="Transactions per page")
@click.pass_context
def view_transactions(
    ctx,
    search: str | None,
    type_filter: str,
    start_date: str | None,
    end_date: str | None,
    page: int,
    page_size: int,
    **period_kwargs,
):
    """View transactions with optional search, filters and paging."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(period_kwargs),
    )

    service = TransactionService(ctx.obj["db"], ctx.obj.get("actor_provider"))
    try:
        result = service.search_transactions(
            search=search,
            type_filter=type_filter,
            start_date=start,
            end_date=end,
            page=page,
            page_size=page_size,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if result.total == 0:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {result.total} transaction(s), page {result.page} of {result.total_pages}:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<25} {'Description':<30}")
    click.echo("-" * 100)

    for txn in result.transactions:
        description = (txn.description or "")[:30]
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.type.value:<8} {format_currency(txn.amount):>14}  "
            f"{txn.category[:25]:<25} {description:<30}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
