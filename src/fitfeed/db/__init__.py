"""Database layer for fitfeed."""

from .engine import connect, get_db_path, init_db
from .repositories import (
    CommentRepository,
    ExerciseRepository,
    FollowRepository,
    LikeRepository,
    ProfileRepository,
    SessionRepository,
    ShareRepository,
    WorkoutExerciseRepository,
    WorkoutRepository,
)

__all__ = [
    "CommentRepository",
    "connect",
    "ExerciseRepository",
    "FollowRepository",
    "get_db_path",
    "init_db",
    "LikeRepository",
    "ProfileRepository",
    "SessionRepository",
    "ShareRepository",
    "WorkoutExerciseRepository",
    "WorkoutRepository",
]
