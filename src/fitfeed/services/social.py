"""Likes, follows, comments and shares."""

import logging
from pathlib import Path

from ..config import MAX_COMMENT_LENGTH
from ..db.repositories import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    ProfileRepository,
    ShareRepository,
    WorkoutRepository,
)
from ..errors import NotFoundError, ValidationError
from ..models.profile import Profile
from ..models.social import Comment

logger = logging.getLogger(__name__)


def share_link(base_url: str, workout_id: str) -> str:
    """Copyable URL of a workout."""
    return f"{base_url.rstrip('/')}/workouts/{workout_id}"


class SocialService:
    """Engagement actions on workouts and profiles."""

    def __init__(self, db_path: Path | None = None):
        self.workouts = WorkoutRepository(db_path)
        self.likes = LikeRepository(db_path)
        self.follows = FollowRepository(db_path)
        self.comments = CommentRepository(db_path)
        self.shares = ShareRepository(db_path)
        self.profiles = ProfileRepository(db_path)

    async def _require_visible(self, user: Profile, workout_id: str) -> None:
        if await self.workouts.get_visible(workout_id, user.id) is None:
            raise NotFoundError("Workout not found")

    async def toggle_like(self, user: Profile, workout_id: str) -> tuple[bool, int]:
        """Like or unlike a workout.

        Returns:
            (liked, like_count) after the toggle
        """
        await self._require_visible(user, workout_id)
        liked = await self.likes.toggle(user.id, workout_id)
        return liked, await self.likes.count(workout_id)

    async def like_count(self, workout_id: str) -> int:
        return await self.likes.count(workout_id)

    async def is_liked(self, user: Profile, workout_id: str) -> bool:
        return await self.likes.exists(user.id, workout_id)

    async def toggle_follow(self, user: Profile, profile_id: str) -> tuple[bool, int]:
        """Follow or unfollow a profile.

        Returns:
            (following, follower_count of the target) after the toggle
        """
        if profile_id == user.id:
            raise ValidationError("You can't follow yourself")
        if await self.profiles.get(profile_id) is None:
            raise NotFoundError("Profile not found")

        following = await self.follows.toggle(user.id, profile_id)
        logger.info(
            "User %s %s %s", user.id, "followed" if following else "unfollowed", profile_id
        )
        return following, await self.follows.follower_count(profile_id)

    async def is_following(self, user: Profile, profile_id: str) -> bool:
        if profile_id == user.id:
            return False
        return await self.follows.exists(user.id, profile_id)

    async def add_comment(self, user: Profile, workout_id: str, content: str) -> Comment:
        """Comment on a workout the user can see."""
        content = content.strip()
        if not content:
            raise ValidationError("Comment cannot be empty")
        if len(content) > MAX_COMMENT_LENGTH:
            raise ValidationError(f"Comments are limited to {MAX_COMMENT_LENGTH} characters")
        await self._require_visible(user, workout_id)

        comment = Comment(
            workout_id=workout_id,
            user_id=user.id,
            content=content,
            author_name=user.full_name,
        )
        await self.comments.create(comment)
        return comment

    async def list_comments(self, user: Profile, workout_id: str) -> list[Comment]:
        """Comments on a workout, newest first."""
        await self._require_visible(user, workout_id)
        return await self.comments.list_for_workout(workout_id)

    async def share_workout(self, user: Profile, workout_id: str) -> int:
        """Repost a workout; returns the new share count."""
        await self._require_visible(user, workout_id)
        await self.shares.create(workout_id, user.id)
        return await self.shares.count(workout_id)
