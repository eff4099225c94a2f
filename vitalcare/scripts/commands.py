"""Flask CLI commands.

Usage examples:
    flask --app vitalcare.wsgi grant-role --email=doc@example.com --role=clinician
    flask --app vitalcare.wsgi dispatch-outbox --once
"""

from __future__ import annotations

import click
from flask import Flask
from flask.cli import with_appcontext

from vitalcare.core.auth.auth_service import grant_role
from vitalcare.platform.worker.config import DispatchConfig
from vitalcare.platform.worker.dispatcher import drain, run_dispatcher


@click.command("grant-role")
@click.option("--email", required=True, help="Target user email (case-insensitive)")
@click.option("--role", required=True, help="Role code, e.g. clinician or admin")
@with_appcontext
def grant_role_command(email: str, role: str):
    """Assign a role to an existing user."""
    role_clean = (role or "").strip().lower()
    if not role_clean:
        click.echo("--role must not be blank", err=True)
        raise click.Abort()
    try:
        user = grant_role(email, role_clean)
    except ValueError as exc:
        if str(exc) == "not_found":
            click.echo(f"User with email {email.strip().lower()} not found", err=True)
            raise click.Abort()
        raise
    click.echo(f"grant_role ok: user_id={user.id} roles={','.join(user.role_codes)}")


@click.command("dispatch-outbox")
@click.option("--once", is_flag=True, help="Drain ready messages and exit instead of polling")
@with_appcontext
def dispatch_outbox_command(once: bool):
    """Publish pending outbox messages to the event bus."""
    config = DispatchConfig.from_env()
    if once:
        processed = drain(config)
        click.echo(f"dispatch ok: processed={processed}")
        return
    run_dispatcher(config)


def register_commands(app: Flask) -> None:
    app.cli.add_command(grant_role_command)
    app.cli.add_command(dispatch_outbox_command)
