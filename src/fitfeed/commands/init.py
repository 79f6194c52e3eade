"""Initialize the database command."""

import click

from ..config import get_data_dir
from ..data import seed_exercises
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Create the fitfeed database and seed the exercise library.

    Safe to run again: tables are created only when missing and only
    exercises not yet in the library are added.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing fitfeed in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    count = await seed_exercises(db_path)
    echo_success(f"Exercise library populated ({count} new exercises)")

    click.echo()
    click.echo("fitfeed is ready!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  fitfeed users create      # Create an account")
    click.echo("  fitfeed serve             # Start the web app")
