"""Data models for fitfeed."""

from .exercises import EquipmentType, Exercise, ExerciseCategory, MuscleGroup
from .profile import FitnessLevel, Profile, Session, UserStats
from .social import Comment
from .workout import (
    Attachment,
    FeedItem,
    FeedPage,
    FeedTab,
    Visibility,
    Workout,
    WorkoutAuthor,
    WorkoutDetail,
    WorkoutDraft,
    WorkoutExercise,
)

__all__ = [
    "Attachment",
    "Comment",
    "EquipmentType",
    "Exercise",
    "ExerciseCategory",
    "FeedItem",
    "FeedPage",
    "FeedTab",
    "FitnessLevel",
    "MuscleGroup",
    "Profile",
    "Session",
    "UserStats",
    "Visibility",
    "Workout",
    "WorkoutAuthor",
    "WorkoutDetail",
    "WorkoutDraft",
    "WorkoutExercise",
]
