"""Tests for utility functions."""

from datetime import datetime, timedelta, timezone

import pytest

from fitfeed.models.exercises import EquipmentType, Exercise, ExerciseCategory, MuscleGroup
from fitfeed.utils.exercise_utils import (
    filter_exercises,
    group_by_muscle,
    normalize_exercise_name,
)
from fitfeed.utils.helpers import (
    format_duration,
    parse_timestamp,
    slugify_handle,
    time_ago,
)


@pytest.fixture
def library():
    return [
        Exercise(
            name="Bench Press",
            category=ExerciseCategory.STRENGTH,
            muscle_group=MuscleGroup.CHEST,
            equipment=[EquipmentType.BARBELL],
        ),
        Exercise(
            name="Overhead Press",
            category=ExerciseCategory.STRENGTH,
            muscle_group=MuscleGroup.SHOULDERS,
            aliases=["OHP"],
        ),
        Exercise(
            name="Romanian Deadlift",
            category=ExerciseCategory.STRENGTH,
            muscle_group=MuscleGroup.HAMSTRINGS,
            aliases=["RDL"],
        ),
    ]


class TestNormalizeExerciseName:
    """Tests for normalize_exercise_name function."""

    def test_lowercase_and_strip(self):
        """Test basic normalization."""
        assert normalize_exercise_name("  Bench Press  ") == "bench press"

    def test_abbreviation_expansion(self):
        """Test abbreviation expansion."""
        assert normalize_exercise_name("OHP") == "overhead press"
        assert normalize_exercise_name("DB Row") == "dumbbell row"

    def test_punctuation_becomes_space(self):
        assert normalize_exercise_name("Push-Up") == "push up"


class TestFilterExercises:
    """Tests for filter_exercises function."""

    def test_empty_query_returns_all(self, library):
        assert filter_exercises(library, "") == library
        assert filter_exercises(library, None) == library

    def test_case_insensitive_substring(self, library):
        """Test search matches anywhere in the name."""
        names = [e.name for e in filter_exercises(library, "PRESS")]
        assert names == ["Bench Press", "Overhead Press"]

    def test_alias_match(self, library):
        """Test search matches aliases too."""
        names = [e.name for e in filter_exercises(library, "rdl")]
        assert names == ["Romanian Deadlift"]


class TestGroupByMuscle:
    def test_groups_sorted_by_muscle(self, library):
        grouped = group_by_muscle(library)
        assert list(grouped) == ["chest", "hamstrings", "shoulders"]


class TestHelpers:
    """Tests for display and parsing helpers."""

    def test_slugify_handle(self):
        """Test handles come from the email local part."""
        assert slugify_handle("Jane.Doe+gym@example.com") == "jane_doe_gym"
        assert slugify_handle("@example.com") == "user"
        assert len(slugify_handle("x" * 50 + "@example.com")) == 30

    def test_parse_naive_timestamp_as_utc(self):
        parsed = parse_timestamp("2024-05-01T10:00:00")
        assert parsed.tzinfo == timezone.utc
        assert parse_timestamp(None) is None

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=30), "just now"),
            (timedelta(minutes=5), "5m"),
            (timedelta(hours=3), "3h"),
            (timedelta(days=2), "2d"),
        ],
    )
    def test_time_ago(self, delta, expected):
        now = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
        assert time_ago(now - delta, now) == expected

    def test_time_ago_old_dates(self):
        now = datetime(2024, 5, 10, tzinfo=timezone.utc)
        assert time_ago(datetime(2024, 1, 2, tzinfo=timezone.utc), now) == "Jan 02, 2024"

    def test_format_duration(self):
        assert format_duration(45) == "45 min"
        assert format_duration(90) == "1h 30m"
        assert format_duration(120) == "2h"
