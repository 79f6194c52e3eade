"""Utilities for exercise name normalization and search."""

import re

from ..models.exercises import Exercise

ABBREVIATIONS = {
    "bb": "barbell",
    "db": "dumbbell",
    "kb": "kettlebell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
    "bss": "bulgarian split squat",
}


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Converts to lowercase, removes extra whitespace and punctuation-only
    differences, and expands common gym abbreviations.
    """
    normalized = name.lower().strip()
    normalized = normalized.replace("-", " ").replace(",", " ")
    normalized = re.sub(r"\s+", " ", normalized).strip()

    if normalized in ABBREVIATIONS:
        return ABBREVIATIONS[normalized]

    for abbrev, full in ABBREVIATIONS.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    return normalized


def filter_exercises(exercises: list[Exercise], query: str | None) -> list[Exercise]:
    """Case-insensitive substring search over names and aliases.

    An empty query returns the list unchanged.
    """
    if not query or not query.strip():
        return exercises

    needle = normalize_exercise_name(query)
    matches = []
    for exercise in exercises:
        haystacks = [exercise.name, *exercise.aliases]
        if any(needle in normalize_exercise_name(text) for text in haystacks):
            matches.append(exercise)
    return matches


def group_by_muscle(exercises: list[Exercise]) -> dict[str, list[Exercise]]:
    """Group exercises by primary muscle group, skipping empty groups."""
    result: dict[str, list[Exercise]] = {}
    for exercise in exercises:
        result.setdefault(exercise.muscle_group.value, []).append(exercise)
    return dict(sorted(result.items()))
