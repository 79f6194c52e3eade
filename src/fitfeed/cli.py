"""CLI entry point for fitfeed."""

import logging

import click

from . import __version__
from .commands import exercises, init, serve, users, workouts
from .logging_setup import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="fitfeed")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """fitfeed: share workouts and follow your friends' training.

    Example usage:

        # Create the database
        fitfeed init

        # Create an account and start the web app
        fitfeed users create
        fitfeed serve

        # Share a workout
        fitfeed workouts link <workout id> --clipboard
    """
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(exercises)
main.add_command(users)
main.add_command(workouts)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
