"""Main CLI entry point."""

import click
from finboard.cli.logging_setup import LOG_LEVELS, configure_logging
from finboard.database.factories import create_sqlite_database
from finboard.domain.session import DatabaseActorProvider

# Import and register all commands at module level
from finboard.cli.commands import (
    add,
    transaction,
    view,
    dashboard,
    report,
    audit,
    user,
    categories,
    seed,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINBOARD_DB_PATH environment variable)",
    envvar="FINBOARD_DB_PATH",
)
@click.option(
    "--user",
    "user_email",
    help="Email of the acting user (overrides FINBOARD_USER environment variable)",
    envvar="FINBOARD_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINBOARD_LOG_LEVEL",
    help="Log level for messages written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_email: str | None, log_level: str):
    """Finboard - Small business financial tracking.

    Record income and expenses, review dashboard summaries, export reports,
    and keep an audit trail of every change.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["actor_provider"] = DatabaseActorProvider(db, user_email)
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
view.register_commands(cli)
dashboard.register_commands(cli)
report.register_commands(cli)
audit.register_commands(cli)
user.register_commands(cli)
categories.register_commands(cli)
seed.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
