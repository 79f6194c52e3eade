"""Workout post data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..utils.helpers import format_timestamp, parse_timestamp
from .exercises import Exercise
from .social import Comment


class Visibility(str, Enum):
    """Who can see a workout."""

    PUBLIC = "public"  # Everyone signed in
    FRIENDS = "friends"  # Author and their followers
    PRIVATE = "private"  # Author only


class FeedTab(str, Enum):
    """Feed sources."""

    FOR_YOU = "for_you"
    FOLLOWING = "following"
    LIKED = "liked"


@dataclass
class WorkoutAuthor:
    """Author fields embedded in feed items."""

    id: str
    full_name: str
    handle: str
    avatar_url: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "handle": self.handle,
            "avatar_url": self.avatar_url,
        }


def unknown_author(author_id: str = "") -> WorkoutAuthor:
    """Placeholder for workouts whose author row is missing."""
    return WorkoutAuthor(id=author_id, full_name="Unknown User", handle="unknown")


@dataclass
class Workout:
    """A user-authored post describing an exercise session."""

    user_id: str
    title: str
    description: str = ""
    duration_minutes: int = 30
    visibility: Visibility = Visibility.PUBLIC
    attachment_url: str | None = None
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and JSON responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "duration_minutes": self.duration_minutes,
            "visibility": self.visibility.value,
            "attachment_url": self.attachment_url,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            title=data["title"],
            description=data.get("description") or "",
            duration_minutes=data.get("duration_minutes", 30),
            visibility=Visibility(data.get("visibility", "public")),
            attachment_url=data.get("attachment_url") or None,
            created_at=parse_timestamp(data.get("created_at")),
        )


@dataclass
class WorkoutExercise:
    """An exercise attached to a workout, in display order."""

    workout_id: str
    exercise_id: int
    order_position: int
    exercise: Exercise | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "exercise_id": self.exercise_id,
            "order_position": self.order_position,
            "exercise": self.exercise.to_dict() if self.exercise else None,
        }


@dataclass
class FeedItem:
    """A workout hydrated with its author and engagement counts."""

    workout: Workout
    author: WorkoutAuthor
    like_count: int = 0
    liked_by_viewer: bool = False
    comment_count: int = 0

    def to_dict(self) -> dict:
        data = self.workout.to_dict()
        data.update(
            {
                "author": self.author.to_dict(),
                "like_count": self.like_count,
                "liked_by_viewer": self.liked_by_viewer,
                "comment_count": self.comment_count,
            }
        )
        return data


@dataclass
class FeedPage:
    """One page of a feed."""

    tab: FeedTab | None
    items: list[FeedItem] = field(default_factory=list)
    cursor: int = 0
    next_cursor: int | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    def to_dict(self) -> dict:
        return {
            "tab": self.tab.value if self.tab else None,
            "cursor": self.cursor,
            "next_cursor": self.next_cursor,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class WorkoutDraft:
    """Form input for a new workout, before validation."""

    title: str
    description: str = ""
    duration_minutes: int = 30
    visibility: str = Visibility.PUBLIC.value


@dataclass
class Attachment:
    """An uploaded file held in memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class WorkoutDetail:
    """Everything the workout detail page shows."""

    item: FeedItem
    exercises: list[WorkoutExercise] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    share_count: int = 0
    is_owner: bool = False

    def to_dict(self) -> dict:
        data = self.item.to_dict()
        data.update(
            {
                "exercises": [we.to_dict() for we in self.exercises],
                "comments": [c.to_dict() for c in self.comments],
                "share_count": self.share_count,
                "is_owner": self.is_owner,
            }
        )
        return data
