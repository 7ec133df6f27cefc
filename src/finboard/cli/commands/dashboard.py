"""Dashboard command."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.dashboard import DashboardService
from finboard.domain.entities import PeriodKey
from finboard.domain.errors import DomainError
from finboard.domain.periods import DEFAULT_PERIOD
from finboard.utils.date_parser import parse_date
from finboard.utils.money import format_change, format_currency

PERIOD_LABELS = {
    PeriodKey.ONE_MONTH: "Last month",
    PeriodKey.THREE_MONTHS: "Last 3 months",
    PeriodKey.SIX_MONTHS: "Last 6 months",
    PeriodKey.YEAR_TO_DATE: "Year to date",
    PeriodKey.ALL: "All time",
}


@click.command("dashboard")
@click.option(
    "--period",
    type=click.Choice([key.value for key in PeriodKey], case_sensitive=False),
    default=DEFAULT_PERIOD.value,
    show_default=True,
    help="Period to summarize",
)
@click.option("--as-of", help="Reference date instead of today (YYYY-MM-DD)")
@click.pass_context
def dashboard(ctx, period: str, as_of: str | None):
    """Show revenue, expenses and profit with charts data for a period."""
    today = None
    if as_of:
        try:
            today = parse_date(as_of)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    try:
        data = DashboardService(ctx.obj["db"]).build_dashboard(period, today=today)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    window = data.period
    since = window.start.isoformat() if window.start else "the beginning"
    click.echo(f"\nDashboard: {PERIOD_LABELS[window.key]} ({since} to {window.end})")
    click.echo("=" * 80)

    summary = data.summary
    for label, amount, change in (
        ("Total Revenue", summary.total_revenue, summary.revenue_change),
        ("Total Expenses", summary.total_expenses, summary.expense_change),
        ("Net Profit", summary.net_profit, summary.net_profit_change),
    ):
        click.echo(f"{label:<30} {format_currency(amount):>20}   {format_change(change):>10} vs last period")

    click.echo("\nExpense Breakdown")
    click.echo("-" * 80)
    if not data.expense_breakdown:
        click.echo("No expenses in this period.")
    for item in data.expense_breakdown:
        click.echo(f"    {item.category:<46} {format_currency(item.amount):>20}")

    click.echo("\nRevenue vs Expenses (last 6 months)")
    click.echo("-" * 80)
    click.echo(f"{'Month':<20} {'Revenue':>20} {'Expenses':>20}")
    for month in data.monthly_series:
        click.echo(
            f"{month.label:<20} {format_currency(month.revenue):>20} {format_currency(month.expenses):>20}"
        )

    click.echo("\nRecent Transactions")
    click.echo("-" * 80)
    if not data.recent_transactions:
        click.echo("No transactions yet.")
    for recent in data.recent_transactions:
        sign = "+" if recent.type == "income" else "-"
        click.echo(f"{str(recent.date):<12} {recent.name[:40]:<40} {sign}{format_currency(recent.amount):>19}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
