"""User account commands."""

import click
import questionary
from questionary import Style

from ..config import MIN_PASSWORD_LENGTH
from ..db import ProfileRepository
from ..errors import FitfeedError
from ..services.auth import AuthService
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    truncate,
)

# Custom style for prompts
custom_style = Style(
    [
        ("qmark", "fg:#2f6fed bold"),
        ("question", "bold"),
        ("answer", "fg:#16632f bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)


@click.group()
@click.pass_context
def users(ctx):
    """Manage user accounts."""
    ensure_initialized(ctx)


@users.command(name="list")
@async_command
async def list_users():
    """List registered users, newest first."""
    profiles = await ProfileRepository().list_all()

    if not profiles:
        echo_info("No users yet. Create one with 'fitfeed users create'")
        return

    rows = []
    for profile in profiles:
        created = profile.created_at.strftime("%Y-%m-%d") if profile.created_at else "N/A"
        rows.append([
            truncate(profile.full_name),
            "@" + profile.handle,
            profile.email,
            created,
            profile.id,
        ])

    click.echo()
    click.echo(format_table(["Name", "Handle", "Email", "Joined", "ID"], rows))
    click.echo()
    click.echo(f"Total: {len(profiles)} user(s)")


async def _ask_missing(email: str | None, full_name: str | None, password: str | None):
    """Prompt for whichever account fields were not given as options."""
    if not email:
        email = await questionary.text("Email:", style=custom_style).ask_async()
    if not full_name:
        full_name = await questionary.text("Full name:", style=custom_style).ask_async()
    if not password:
        password = await questionary.password(
            "Password:",
            validate=lambda value: len(value) >= MIN_PASSWORD_LENGTH
            or f"At least {MIN_PASSWORD_LENGTH} characters",
            style=custom_style,
        ).ask_async()
    return email, full_name, password


@users.command(name="create")
@click.option("--email", help="Account email")
@click.option("--name", "full_name", help="Display name")
@click.option("--password", help="Password (prompted when omitted)")
@click.pass_context
@async_command
async def create_user(ctx, email: str | None, full_name: str | None, password: str | None):
    """Create an account, prompting for anything not passed as an option."""
    email, full_name, password = await _ask_missing(email, full_name, password)
    if None in (email, full_name, password):
        echo_error("Cancelled")
        ctx.exit(1)

    try:
        profile = await AuthService().sign_up(email, password, full_name)
    except FitfeedError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Created @{profile.handle} (ID: {profile.id})")
