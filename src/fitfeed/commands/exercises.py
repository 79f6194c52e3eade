"""Exercise library commands."""

import click

from ..errors import FitfeedError
from ..models.exercises import EquipmentType, Exercise, ExerciseCategory, MuscleGroup
from ..services.exercises import ExerciseService
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
def exercises(ctx):
    """Browse and extend the exercise library."""
    ensure_initialized(ctx)


@exercises.command(name="list")
@click.option("--search", "-s", help="Filter by name or alias")
@async_command
async def list_exercises(search: str | None):
    """List exercises ordered by name."""
    found = await ExerciseService().list_exercises(search)

    if not found:
        echo_info("No exercises found")
        return

    rows = [
        [str(e.id), truncate(e.name), e.category.value, e.muscle_group.value, e.equipment_display]
        for e in found
    ]
    click.echo()
    click.echo(format_table(["ID", "Name", "Category", "Muscle", "Equipment"], rows))
    click.echo()
    click.echo(f"Total: {len(found)} exercise(s)")


@exercises.command(name="add")
@click.option("--name", prompt="Exercise name")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ExerciseCategory]),
    default=ExerciseCategory.STRENGTH.value,
    prompt=True,
)
@click.option(
    "--muscle",
    type=click.Choice([m.value for m in MuscleGroup]),
    prompt="Primary muscle group",
)
@click.option(
    "--equipment",
    "-e",
    multiple=True,
    type=click.Choice([eq.value for eq in EquipmentType]),
    help="Equipment used (repeatable)",
)
@click.option("--description", default="", help="Short how-to")
@click.pass_context
@async_command
async def add_exercise(
    ctx,
    name: str,
    category: str,
    muscle: str,
    equipment: tuple[str, ...],
    description: str,
):
    """Add an exercise to the library."""
    exercise = Exercise(
        name=name,
        category=ExerciseCategory(category),
        muscle_group=MuscleGroup(muscle),
        equipment=[EquipmentType(eq) for eq in equipment],
        description=description,
    )
    try:
        exercise = await ExerciseService().add_exercise(exercise)
    except FitfeedError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Added '{exercise.name}' (ID: {exercise.id})")
