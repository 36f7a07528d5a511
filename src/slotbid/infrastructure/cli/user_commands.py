"""CLI commands for the user directory."""

from __future__ import annotations

import click

from slotbid.application.add_user import AddUserHandler
from slotbid.domain.exceptions import DomainException
from slotbid.infrastructure.bootstrap import user_repository


@click.command("add")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="E-mail address (unique).")
@click.option("--admin", is_flag=True, default=False, help="Register as an admin.")
def user_add(name: str, email: str, admin: bool) -> None:
    """Register a user."""
    handler = AddUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(name=name, email=email, admin=admin)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} '{user.name}' added as {user.role.value}")


@click.command("list")
def user_list() -> None:
    """List all users."""
    users = user_repository().list_all()

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'E-mail':<28} {'Role'}")
    click.echo("-" * 62)
    for u in users:
        click.echo(f"{u.id:<6} {u.name:<20} {u.email:<28} {u.role.value}")
