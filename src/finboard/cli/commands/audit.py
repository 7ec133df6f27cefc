"""Audit log commands."""

import click
from finboard.cli.date_filters import resolve_cli_date_range
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.audit import DEFAULT_AUDIT_PAGE_SIZE, DEFAULT_AUDIT_SORT, AuditLogService
from finboard.domain.entities import EventType, Outcome
from finboard.domain.errors import DomainError


@click.command("audit")
@click.option("--start-date", help="Entries on or after this local date")
@click.option("--end-date", help="Entries on or before this local date")
@click.option("--name", "display_name", help="Match actor display name (case-insensitive)")
@click.option(
    "--event-type",
    type=click.Choice([e.value for e in EventType], case_sensitive=False),
    help="Event type filter",
)
@click.option("--resource", help="Resource filter (e.g., transaction)")
@click.option(
    "--outcome",
    type=click.Choice([o.value for o in Outcome], case_sensitive=False),
    help="Outcome filter",
)
@click.option("--sort", default=DEFAULT_AUDIT_SORT, show_default=True, help="Sort as field:asc or field:desc")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--page-size", type=int, default=DEFAULT_AUDIT_PAGE_SIZE, show_default=True, help="Entries per page (max 100)")
@click.option("--verbose", "-v", is_flag=True, help="Show previous and new state snapshots")
@click.pass_context
def audit_logs(
    ctx,
    start_date: str | None,
    end_date: str | None,
    display_name: str | None,
    event_type: str | None,
    resource: str | None,
    outcome: str | None,
    sort: str,
    page: int,
    page_size: int,
    verbose: bool,
):
    """View the audit log. Requires an Admin user (see --user)."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags={}
    )

    service = AuditLogService(ctx.obj["db"], ctx.obj.get("actor_provider"))
    try:
        result = service.list_entries(
            start_date=start,
            end_date=end,
            display_name=display_name,
            event_type=event_type,
            resource=resource,
            outcome=outcome,
            sort=sort,
            page=page,
            page_size=page_size,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if result.total == 0:
        click.echo("No audit log entries found.")
        return

    click.echo(f"\nAudit log: {result.total} entr{'y' if result.total == 1 else 'ies'} (page {result.page}):")
    click.echo("-" * 100)
    click.echo(f"{'Timestamp (UTC)':<20} {'User':<25} {'Event':<8} {'Resource':<14} {'ID':<8} {'Outcome':<8}")
    click.echo("-" * 100)
    for entry in result.entries:
        click.echo(
            f"{entry.timestamp:%Y-%m-%d %H:%M:%S} {entry.display_name[:25]:<25} {entry.event_type.value:<8} "
            f"{entry.resource[:14]:<14} {entry.resource_id or '-':<8} {entry.outcome.value:<8}"
        )
        if verbose:
            click.echo(f"    previous: {entry.previous_state or '-'}")
            click.echo(f"    new:      {entry.new_state or '-'}")


def register_commands(cli):
    """Register audit command with main CLI."""
    cli.add_command(audit_logs)
