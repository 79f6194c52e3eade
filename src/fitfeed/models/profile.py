"""User profile data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..utils.helpers import format_timestamp, parse_timestamp


class FitnessLevel(str, Enum):
    """Self-reported training level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class Profile:
    """A registered user as shown to other users."""

    email: str
    full_name: str
    handle: str
    avatar_url: str | None = None
    bio: str = ""
    fitness_level: FitnessLevel | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and JSON responses."""
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "handle": self.handle,
            "avatar_url": self.avatar_url,
            "bio": self.bio,
            "fitness_level": self.fitness_level.value if self.fitness_level else None,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    def to_public_dict(self) -> dict:
        """Profile fields safe to show to other users."""
        data = self.to_dict()
        del data["email"]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """Create from dictionary."""
        level = data.get("fitness_level")
        return cls(
            id=data.get("id"),
            email=data["email"],
            full_name=data["full_name"],
            handle=data["handle"],
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio") or "",
            fitness_level=FitnessLevel(level) if level else None,
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    @property
    def initials(self) -> str:
        """Up to two initials for avatar placeholders."""
        parts = [p for p in self.full_name.split() if p]
        return "".join(p[0].upper() for p in parts[:2]) or "?"


@dataclass
class UserStats:
    """Aggregate workout totals for a profile."""

    user_id: str
    total_workouts: int = 0
    total_duration: int = 0

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "total_workouts": self.total_workouts,
            "total_duration": self.total_duration,
        }


@dataclass
class Session:
    """A signed-in browser session."""

    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
