"""Paginated workout feeds.

Each feed is a single visibility-filtered query over ``workouts`` for one
page of rows, followed by hydration queries for the authors, like counts,
the viewer's likes and comment counts of that page. Pages are addressed by
a row offset (``cursor``); a full page yields ``next_cursor``.
"""

from pathlib import Path

from ..config import PAGE_SIZE
from ..db.repositories import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    ProfileRepository,
    WorkoutRepository,
)
from ..errors import ValidationError
from ..models.profile import Profile
from ..models.workout import FeedItem, FeedPage, FeedTab, Workout, WorkoutAuthor, unknown_author


class FeedService:
    """Builds feed pages for a signed-in viewer."""

    def __init__(self, db_path: Path | None = None, page_size: int = PAGE_SIZE):
        self.page_size = page_size
        self.workouts = WorkoutRepository(db_path)
        self.likes = LikeRepository(db_path)
        self.follows = FollowRepository(db_path)
        self.comments = CommentRepository(db_path)
        self.profiles = ProfileRepository(db_path)

    async def get_feed(self, viewer: Profile, tab: FeedTab, cursor: int = 0) -> FeedPage:
        """Dispatch to the feed for a tab."""
        if tab == FeedTab.FOLLOWING:
            return await self.following(viewer, cursor)
        if tab == FeedTab.LIKED:
            return await self.liked(viewer, cursor)
        return await self.for_you(viewer, cursor)

    async def for_you(self, viewer: Profile, cursor: int = 0) -> FeedPage:
        """Everything the viewer may see, newest first."""
        self._check_cursor(cursor)
        rows = await self.workouts.list_visible(viewer.id, cursor, self.page_size)
        return await self._page(FeedTab.FOR_YOU, viewer, rows, cursor)

    async def following(self, viewer: Profile, cursor: int = 0) -> FeedPage:
        """Workouts by accounts the viewer follows."""
        self._check_cursor(cursor)
        following_ids = await self.follows.following_ids(viewer.id)
        if not following_ids:
            return FeedPage(tab=FeedTab.FOLLOWING, cursor=cursor)
        rows = await self.workouts.list_visible(
            viewer.id, cursor, self.page_size, author_ids=following_ids
        )
        return await self._page(FeedTab.FOLLOWING, viewer, rows, cursor)

    async def liked(self, viewer: Profile, cursor: int = 0) -> FeedPage:
        """Workouts the viewer has liked, newest workout first."""
        self._check_cursor(cursor)
        rows = await self.workouts.list_visible(
            viewer.id, cursor, self.page_size, liked_by=viewer.id
        )
        return await self._page(FeedTab.LIKED, viewer, rows, cursor)

    async def profile(self, viewer: Profile, profile_id: str, cursor: int = 0) -> FeedPage:
        """One author's workouts as the viewer may see them."""
        self._check_cursor(cursor)
        rows = await self.workouts.list_visible(
            viewer.id, cursor, self.page_size, author_id=profile_id
        )
        return await self._page(None, viewer, rows, cursor)

    async def hydrate(self, viewer: Profile, workouts: list[Workout]) -> list[FeedItem]:
        """Attach author, like and comment data to workouts."""
        if not workouts:
            return []

        workout_ids = [w.id for w in workouts]
        authors = await self.profiles.get_many([w.user_id for w in workouts])
        like_counts = await self.likes.counts_for(workout_ids)
        liked = await self.likes.liked_among(viewer.id, workout_ids)
        comment_counts = await self.comments.counts_for(workout_ids)

        items = []
        for workout in workouts:
            author = authors.get(workout.user_id)
            items.append(
                FeedItem(
                    workout=workout,
                    author=(
                        WorkoutAuthor(
                            id=author.id,
                            full_name=author.full_name,
                            handle=author.handle,
                            avatar_url=author.avatar_url,
                        )
                        if author
                        else unknown_author(workout.user_id)
                    ),
                    like_count=like_counts.get(workout.id, 0),
                    liked_by_viewer=workout.id in liked,
                    comment_count=comment_counts.get(workout.id, 0),
                )
            )
        return items

    async def _page(
        self, tab: FeedTab | None, viewer: Profile, rows: list[Workout], cursor: int
    ) -> FeedPage:
        next_cursor = cursor + self.page_size if len(rows) == self.page_size else None
        return FeedPage(
            tab=tab,
            items=await self.hydrate(viewer, rows),
            cursor=cursor,
            next_cursor=next_cursor,
        )

    @staticmethod
    def _check_cursor(cursor: int) -> None:
        if cursor < 0:
            raise ValidationError("Cursor must not be negative")
