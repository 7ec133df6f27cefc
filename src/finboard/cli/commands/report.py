"""Report commands."""

import io

import click
from finboard.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.errors import DomainError
from finboard.domain.report import ReportService
from finboard.utils.date_parser import get_date_range
from finboard.utils.money import format_currency


@click.command("report")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option(
    "--type",
    "type_filter",
    type=click.Choice(["All", "Income", "Expense"], case_sensitive=False),
    default="All",
    show_default=True,
    help="Transaction type filter",
)
@click.option(
    "--export-csv",
    "csv_path",
    type=click.Path(dir_okay=False, writable=True, allow_dash=True),
    help="Write the report's transactions to a CSV file ('-' for stdout)",
)
@click.pass_context
def report(
    ctx,
    start_date: str | None,
    end_date: str | None,
    type_filter: str,
    csv_path: str | None,
    **period_kwargs,
):
    """Show a financial report and optionally export it as CSV.

    Defaults to the current month when no dates are given.
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(period_kwargs),
        default_range=get_date_range("this-month"),
    )

    service = ReportService(ctx.obj["db"])
    try:
        result = service.build_report(start_date=start, end_date=end, type_filter=type_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if csv_path == "-":
        buffer = io.StringIO()
        service.export_csv(result, buffer)
        click.echo(buffer.getvalue(), nl=False)
        return
    if csv_path:
        try:
            with open(csv_path, "w", newline="", encoding="utf-8") as stream:
                rows = service.export_csv(result, stream)
        except OSError as e:
            click.echo(f"Error: Could not write {csv_path}: {e.strerror or e}", err=True)
            ctx.exit(1)
        click.echo(f"Exported {rows} transaction(s) to {csv_path}")
        return

    click.echo(f"\nFinancial Report: {start or 'beginning'} to {end or 'today'}")
    click.echo("-" * 80)
    click.echo(f"{'Total Income':<50} {format_currency(result.total_income):>20}")
    click.echo(f"{'Total Expenses':<50} {format_currency(result.total_expense):>20}")
    click.echo(f"{'Net Profit':<50} {format_currency(result.net_profit):>20}")

    if not result.transactions:
        click.echo("\nNo transactions found.")
        return

    click.echo("\nBy Category")
    click.echo("-" * 80)
    for category, total in result.category_totals.items():
        click.echo(f"    {category:<46} {format_currency(total):>20}")

    click.echo(f"\nShowing {len(result.transactions)} transactions for the selected period")
    click.echo("-" * 80)
    for txn in result.transactions:
        click.echo(
            f"{str(txn.date):<12} {txn.type.value:<8} {txn.category[:30]:<30} {format_currency(txn.amount):>20}"
        )


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
