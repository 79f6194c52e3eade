"""Service layer: the operations behind the web routes and CLI commands."""

from .auth import AuthService
from .exercises import ExerciseService
from .feed import FeedService
from .profiles import ProfilePage, ProfileService
from .social import SocialService, share_link
from .workouts import CreateWorkoutResult, WorkoutService, build_workout

__all__ = [
    "AuthService",
    "build_workout",
    "CreateWorkoutResult",
    "ExerciseService",
    "FeedService",
    "ProfilePage",
    "ProfileService",
    "share_link",
    "SocialService",
    "WorkoutService",
]
