"""Profile pages and profile editing."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import AVATARS_BUCKET, MAX_BIO_LENGTH, RECENT_WORKOUTS_LIMIT
from ..db.repositories import FollowRepository, ProfileRepository, WorkoutRepository
from ..errors import NotFoundError, ValidationError
from ..models.profile import FitnessLevel, Profile, UserStats
from ..models.workout import Attachment, FeedItem, FeedPage
from ..storage import LocalStorage, validate_image
from .feed import FeedService

logger = logging.getLogger(__name__)


@dataclass
class ProfilePage:
    """Everything shown on a profile page."""

    profile: Profile
    stats: UserStats
    recent_workouts: list[FeedItem] = field(default_factory=list)
    photos: list[str] = field(default_factory=list)
    follower_count: int = 0
    following_count: int = 0
    is_following: bool = False
    is_self: bool = False

    def to_dict(self) -> dict:
        return {
            "profile": self.profile.to_public_dict(),
            "stats": self.stats.to_dict(),
            "recent_workouts": [item.to_dict() for item in self.recent_workouts],
            "photos": self.photos,
            "follower_count": self.follower_count,
            "following_count": self.following_count,
            "is_following": self.is_following,
            "is_self": self.is_self,
        }


class ProfileService:
    """Profile reads and edits."""

    def __init__(self, db_path: Path | None = None, storage: LocalStorage | None = None):
        self.storage = storage or LocalStorage()
        self.profiles = ProfileRepository(db_path)
        self.workouts = WorkoutRepository(db_path)
        self.follows = FollowRepository(db_path)
        self.feed = FeedService(db_path)
        self.recent = FeedService(db_path, page_size=RECENT_WORKOUTS_LIMIT)

    async def get_profile(self, profile_id: str) -> Profile:
        profile = await self.profiles.get(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def get_profile_page(self, viewer: Profile, profile_id: str) -> ProfilePage:
        """Load a profile with stats, recent workouts, photos and follow data."""
        profile = await self.get_profile(profile_id)
        is_self = profile.id == viewer.id

        recent = await self.recent.profile(viewer, profile.id)
        return ProfilePage(
            profile=profile,
            stats=await self.workouts.get_stats(profile.id),
            recent_workouts=recent.items,
            photos=await self.workouts.list_attachments(profile.id, viewer.id),
            follower_count=await self.follows.follower_count(profile.id),
            following_count=await self.follows.following_count(profile.id),
            is_following=False if is_self else await self.follows.exists(viewer.id, profile.id),
            is_self=is_self,
        )

    async def list_workouts(
        self, viewer: Profile, profile_id: str, cursor: int = 0
    ) -> FeedPage:
        """A page of one profile's workouts as the viewer may see them."""
        await self.get_profile(profile_id)
        return await self.feed.profile(viewer, profile_id, cursor)

    async def list_followers(self, profile_id: str) -> list[Profile]:
        """Profiles following this one."""
        await self.get_profile(profile_id)
        ids = await self.follows.list_follower_ids(profile_id)
        profiles = await self.profiles.get_many(ids)
        return [profiles[i] for i in ids if i in profiles]

    async def list_following(self, profile_id: str) -> list[Profile]:
        """Profiles this one follows."""
        await self.get_profile(profile_id)
        ids = await self.follows.following_ids(profile_id)
        profiles = await self.profiles.get_many(ids)
        return [profiles[i] for i in ids if i in profiles]

    async def update_profile(
        self,
        user: Profile,
        bio: str | None = None,
        full_name: str | None = None,
        fitness_level: str | None = None,
    ) -> Profile:
        """Edit bio, display name and fitness level; None leaves a field alone."""
        profile = await self.get_profile(user.id)

        if bio is not None:
            bio = bio.strip()
            if len(bio) > MAX_BIO_LENGTH:
                raise ValidationError(f"Bio must be at most {MAX_BIO_LENGTH} characters")
            profile.bio = bio

        if full_name is not None:
            full_name = full_name.strip()
            if not full_name:
                raise ValidationError("Full name is required")
            profile.full_name = full_name

        if fitness_level is not None:
            if fitness_level == "":
                profile.fitness_level = None
            else:
                try:
                    profile.fitness_level = FitnessLevel(fitness_level)
                except ValueError:
                    raise ValidationError(f"Unknown fitness level '{fitness_level}'") from None

        await self.profiles.update(profile)
        return profile

    async def update_bio(self, user: Profile, bio: str) -> Profile:
        return await self.update_profile(user, bio=bio)

    async def update_avatar(self, user: Profile, upload: Attachment | None) -> Profile:
        """Replace the user's avatar, or clear it when no upload is given."""
        profile = await self.get_profile(user.id)

        if upload is None:
            if profile.avatar_url:
                self.storage.remove(AVATARS_BUCKET, profile.avatar_url)
            profile.avatar_url = None
        else:
            validate_image(upload)
            profile.avatar_url = self.storage.upload(
                AVATARS_BUCKET, profile.id, upload.content, upsert=True
            )

        await self.profiles.update(profile)
        logger.info("Updated avatar for %s", profile.id)
        return profile
