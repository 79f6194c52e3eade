"""Tests for the fitfeed CLI."""

import asyncio

import pytest
from click.testing import CliRunner

from fitfeed.cli import main
from fitfeed.db import ProfileRepository, WorkoutRepository, get_db_path
from fitfeed.models.workout import Workout


@pytest.fixture
def runner(temp_data_dir, monkeypatch):
    monkeypatch.setenv("FITFEED_DATA_DIR", str(temp_data_dir))
    return CliRunner()


@pytest.fixture
def initialized(runner):
    result = runner.invoke(main, ["init"])
    assert result.exit_code == 0, result.output
    return runner


def create_user(runner, email="sam@example.com", name="Sam Squats"):
    return runner.invoke(
        main,
        ["users", "create", "--email", email, "--name", name, "--password", "secret123"],
    )


class TestInit:
    """Tests for the init command."""

    def test_init_seeds_library(self, runner):
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "Database initialized" in result.output
        assert "Exercise library populated" in result.output
        assert get_db_path().exists()

    def test_init_is_repeatable(self, initialized):
        result = initialized.invoke(main, ["init"])
        assert result.exit_code == 0
        assert "(0 new exercises)" in result.output

    def test_commands_require_init(self, runner):
        result = runner.invoke(main, ["users", "list"])
        assert result.exit_code == 1
        assert "fitfeed init" in result.output


class TestExerciseCommands:
    def test_list_with_search(self, initialized):
        result = initialized.invoke(main, ["exercises", "list", "--search", "deadlift"])

        assert result.exit_code == 0
        assert "Romanian Deadlift" in result.output
        assert "Bench Press" not in result.output
        assert "Total: 2 exercise(s)" in result.output

    def test_add(self, initialized):
        result = initialized.invoke(
            main,
            ["exercises", "add", "--name", "Sled Push", "--category", "strength",
             "--muscle", "quads", "-e", "machine"],
        )
        assert result.exit_code == 0, result.output
        assert "Added 'Sled Push'" in result.output

        listed = initialized.invoke(main, ["exercises", "list", "-s", "sled"])
        assert "Sled Push" in listed.output

    def test_add_duplicate(self, initialized):
        result = initialized.invoke(
            main, ["exercises", "add", "--name", "Squat", "--category", "strength", "--muscle", "quads"]
        )
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestUserCommands:
    def test_create_and_list(self, initialized):
        result = create_user(initialized)
        assert result.exit_code == 0, result.output
        assert "Created @sam" in result.output

        listed = initialized.invoke(main, ["users", "list"])
        assert "Sam Squats" in listed.output
        assert "sam@example.com" in listed.output

    def test_create_duplicate(self, initialized):
        create_user(initialized)
        result = create_user(initialized)
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestWorkoutCommands:
    """Tests for workout listing and share links."""

    @pytest.fixture
    def workout(self, initialized):
        create_user(initialized)
        db_path = get_db_path()
        profile = asyncio.run(ProfileRepository(db_path).get_by_email("sam@example.com"))
        workout = Workout(user_id=profile.id, title="Heavy singles", duration_minutes=75)
        asyncio.run(WorkoutRepository(db_path).create(workout))
        return workout

    def test_list(self, initialized, workout):
        result = initialized.invoke(main, ["workouts", "list", "--user", "sam@example.com"])

        assert result.exit_code == 0
        assert "Heavy singles" in result.output
        assert "1h 15m" in result.output

    def test_list_unknown_user(self, initialized):
        result = initialized.invoke(main, ["workouts", "list", "-u", "ghost@example.com"])
        assert result.exit_code == 1

    def test_link_prints_url(self, initialized, workout):
        result = initialized.invoke(main, ["workouts", "link", workout.id])
        assert result.output.strip() == f"http://127.0.0.1:8000/workouts/{workout.id}"

    def test_link_to_clipboard(self, initialized, workout, monkeypatch):
        copied = []
        monkeypatch.setattr("pyperclip.copy", copied.append)

        result = initialized.invoke(
            main, ["workouts", "link", workout.id, "--clipboard", "--base-url", "https://fit.example"]
        )
        assert result.exit_code == 0
        assert copied == [f"https://fit.example/workouts/{workout.id}"]

    def test_link_missing(self, initialized):
        result = initialized.invoke(main, ["workouts", "link", "nope"])
        assert result.exit_code == 1
        assert "not found" in result.output
