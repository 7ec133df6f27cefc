"""User management commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.entities import Role
from finboard.domain.errors import DomainError
from finboard.domain.user import UserService

ROLE_CHOICES = click.Choice([role.value for role in Role] + ["User"], case_sensitive=False)


def _service(ctx) -> UserService:
    return UserService(ctx.obj["db"], ctx.obj.get("actor_provider"))


@click.group("user")
def user_group():
    """Manage users and roles. Requires an Admin user (see --user)."""
    pass


@user_group.command("create")
@click.option("--email", required=True, help="User email")
@click.option("--name", "display_name", help="Display name used in the audit log")
@click.option("--role", default=Role.STANDARD.value, show_default=True, type=ROLE_CHOICES, help="User role")
@click.pass_context
def create_user(ctx, email: str, display_name: str | None, role: str):
    """Create a user.

    The first user can be created without --user and must be an Admin.
    """
    try:
        user_id = _service(ctx).create_user(email=email, role=role, display_name=display_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created user {user_id}: {email} ({Role.normalize(role).value})")


@user_group.command("list")
@click.option("--search", help="Match email or display name")
@click.pass_context
def list_users(ctx, search: str | None):
    """List users."""
    try:
        users = _service(ctx).list_users(search=search)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Email':<35} {'Name':<25} {'Role':<15}")
    click.echo("-" * 80)
    for user in users:
        click.echo(f"{user.id:<6} {user.email:<35} {user.display_name or '':<25} {user.role.value:<15}")


@user_group.command("role")
@click.argument("user_id", type=int)
@click.argument("role", type=ROLE_CHOICES)
@click.pass_context
def change_role(ctx, user_id: int, role: str):
    """Change a user's role."""
    try:
        _service(ctx).change_role(user_id, role)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"User {user_id} is now {Role.normalize(role).value}")


@user_group.command("delete")
@click.argument("user_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_user(ctx, user_id: int, yes: bool):
    """Delete a user."""
    if not yes:
        click.confirm(f"Delete user {user_id}?", abort=True)
    try:
        _service(ctx).delete_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted user {user_id}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group)
