"""Exercise library loader from the bundled JSON file."""

import json
import logging
from pathlib import Path

from ..db.engine import get_db_path
from ..db.repositories import ExerciseRepository
from ..models.exercises import Exercise

logger = logging.getLogger(__name__)


def get_exercises_json_path() -> Path:
    """Get the path to the bundled exercises JSON file."""
    return Path(__file__).parent / "exercises.json"


def load_exercise_library(json_path: Path | None = None) -> list[Exercise]:
    """Load exercises from a JSON file.

    Returns:
        List of Exercise objects; invalid entries are skipped
    """
    json_path = json_path or get_exercises_json_path()
    if not json_path.exists():
        return []

    with open(json_path) as f:
        data = json.load(f)

    exercises = []
    for ex_data in data.get("exercises", []):
        try:
            exercises.append(Exercise.from_dict(ex_data))
        except (ValueError, KeyError) as e:
            logger.warning(
                "Skipping invalid exercise %s: %s", ex_data.get("name", "unknown"), e
            )
            continue

    return exercises


async def seed_exercises(db_path: Path | None = None, json_path: Path | None = None) -> int:
    """Seed the exercise library; existing names are left untouched.

    Returns:
        Number of exercises inserted
    """
    if db_path is None:
        db_path = get_db_path()

    exercises = load_exercise_library(json_path)
    count = await ExerciseRepository(db_path).add_missing(exercises)
    logger.info("Seeded %d of %d library exercises", count, len(exercises))
    return count
