"""Workout commands."""

import click
import pyperclip

from ..db import ProfileRepository, WorkoutRepository
from ..services.social import share_link
from ..utils.helpers import format_duration
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    truncate,
)


@click.group()
@click.pass_context
def workouts(ctx):
    """Inspect posted workouts."""
    ensure_initialized(ctx)


@workouts.command(name="list")
@click.option("--user", "-u", "email", help="Only workouts by this email address")
@click.pass_context
@async_command
async def list_workouts(ctx, email: str | None):
    """List workouts, newest first."""
    profiles = ProfileRepository()
    user_id = None
    if email:
        profile = await profiles.get_by_email(email.strip().lower())
        if profile is None:
            echo_error(f"No user with email {email}")
            ctx.exit(1)
        user_id = profile.id

    found = await WorkoutRepository().list_all(user_id)
    if not found:
        echo_info("No workouts found")
        return

    authors = await profiles.get_many([w.user_id for w in found])
    rows = []
    for workout in found:
        author = authors.get(workout.user_id)
        created = workout.created_at.strftime("%Y-%m-%d %H:%M") if workout.created_at else "N/A"
        rows.append([
            workout.id,
            truncate(workout.title),
            "@" + author.handle if author else "unknown",
            format_duration(workout.duration_minutes),
            workout.visibility.value,
            created,
        ])

    click.echo()
    click.echo(format_table(["ID", "Title", "Author", "Duration", "Visibility", "Posted"], rows))
    click.echo()
    click.echo(f"Total: {len(found)} workout(s)")


@workouts.command(name="link")
@click.argument("workout_id")
@click.option(
    "--base-url",
    default="http://127.0.0.1:8000",
    show_default=True,
    help="Address the web app is served from",
)
@click.option("--clipboard", "-c", is_flag=True, help="Copy to clipboard instead of printing")
@click.pass_context
@async_command
async def link(ctx, workout_id: str, base_url: str, clipboard: bool):
    """Print or copy the share link of a workout."""
    workout = await WorkoutRepository().get(workout_id)
    if workout is None:
        echo_error(f"Workout {workout_id} not found")
        ctx.exit(1)

    url = share_link(base_url, workout.id)
    if clipboard:
        pyperclip.copy(url)
        echo_success("Copied to clipboard!")
    else:
        click.echo(url)
