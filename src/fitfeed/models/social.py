"""Comment model."""

from dataclasses import dataclass
from datetime import datetime

from ..utils.helpers import format_timestamp


@dataclass
class Comment:
    """A comment on a workout."""

    workout_id: str
    user_id: str
    content: str
    id: str | None = None
    created_at: datetime | None = None
    author_name: str | None = None  # Filled in on reads

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "user_id": self.user_id,
            "content": self.content,
            "created_at": format_timestamp(self.created_at),
            "author_name": self.author_name,
        }
