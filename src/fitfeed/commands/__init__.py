"""CLI commands for fitfeed."""

from .exercises import exercises
from .init import init
from .serve import serve
from .users import users
from .workouts import workouts

__all__ = [
    "exercises",
    "init",
    "serve",
    "users",
    "workouts",
]
