"""Exercise library lookups."""

import logging
from pathlib import Path

from ..db.repositories import ExerciseRepository
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models.exercises import Exercise
from ..utils.exercise_utils import filter_exercises

logger = logging.getLogger(__name__)


class ExerciseService:
    """Search and extend the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.exercises = ExerciseRepository(db_path)

    async def list_exercises(self, search: str | None = None) -> list[Exercise]:
        """All exercises ordered by name, optionally filtered by a search term."""
        return filter_exercises(await self.exercises.list_all(), search)

    async def get_exercise(self, exercise_id: int) -> Exercise:
        exercise = await self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFoundError(f"Exercise {exercise_id} not found")
        return exercise

    async def add_exercise(self, exercise: Exercise) -> Exercise:
        """Add an exercise; names are unique ignoring case."""
        exercise.name = exercise.name.strip()
        if not exercise.name:
            raise ValidationError("Exercise name is required")
        if await self.exercises.get_by_name(exercise.name):
            raise ConflictError(f"Exercise '{exercise.name}' already exists")

        exercise.id = await self.exercises.add(exercise)
        logger.info("Added exercise %s (%s)", exercise.id, exercise.name)
        return exercise
