"""Bundled data and loaders."""

from .exercise_loader import load_exercise_library, seed_exercises

__all__ = ["load_exercise_library", "seed_exercises"]
