"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path

import pytest

from fitfeed.data import seed_exercises
from fitfeed.db import init_db
from fitfeed.db.repositories import WorkoutRepository
from fitfeed.models.profile import Profile
from fitfeed.models.workout import Visibility, Workout
from fitfeed.services.auth import AuthService
from fitfeed.storage import LocalStorage


@pytest.fixture
def temp_data_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db_path(temp_data_dir):
    """Create an initialized database with the exercise library seeded."""
    db_path = temp_data_dir / "test.db"
    asyncio.run(init_db(db_path))
    asyncio.run(seed_exercises(db_path))
    return db_path


@pytest.fixture
def storage(temp_data_dir):
    return LocalStorage(temp_data_dir / "storage")


@pytest.fixture
def make_user(temp_db_path):
    """Factory that registers a user and returns its profile."""

    def _make_user(name: str) -> Profile:
        email = f"{name.lower().replace(' ', '.')}@example.com"
        return asyncio.run(AuthService(temp_db_path).sign_up(email, "secret123", name))

    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("Alice Runner")


@pytest.fixture
def bob(make_user):
    return make_user("Bob Lifter")


@pytest.fixture
def post_workout(temp_db_path):
    """Factory that inserts a workout directly through the repository."""

    def _post(author: Profile, title: str = "Morning run", visibility=Visibility.PUBLIC) -> Workout:
        workout = Workout(user_id=author.id, title=title, visibility=visibility)
        asyncio.run(WorkoutRepository(temp_db_path).create(workout))
        return workout

    return _post
