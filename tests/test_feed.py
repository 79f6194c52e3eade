"""Tests for the paginated feeds."""

import asyncio

import pytest

from fitfeed.config import PAGE_SIZE
from fitfeed.errors import ValidationError
from fitfeed.models.workout import FeedTab, Visibility, Workout
from fitfeed.services.feed import FeedService
from fitfeed.services.social import SocialService


class TestForYouFeed:
    """Tests for the "for you" feed."""

    def test_pages_of_twenty_five(self, temp_db_path, alice, post_workout):
        """Test a full page yields a cursor and the last page does not."""
        for i in range(PAGE_SIZE + 3):
            post_workout(alice, f"Workout {i}")
        feed = FeedService(temp_db_path)

        first = asyncio.run(feed.get_feed(alice, FeedTab.FOR_YOU))
        assert len(first.items) == PAGE_SIZE
        assert first.next_cursor == PAGE_SIZE
        assert first.items[0].workout.title == f"Workout {PAGE_SIZE + 2}"

        second = asyncio.run(feed.get_feed(alice, FeedTab.FOR_YOU, first.next_cursor))
        assert len(second.items) == 3
        assert second.next_cursor is None
        assert second.items[-1].workout.title == "Workout 0"

    def test_exact_page_reports_more_then_empty(self, temp_db_path, alice, post_workout):
        """Test a full final page still offers a cursor that returns nothing."""
        for i in range(PAGE_SIZE):
            post_workout(alice, f"Workout {i}")
        feed = FeedService(temp_db_path)

        first = asyncio.run(feed.for_you(alice))
        assert first.has_more
        second = asyncio.run(feed.for_you(alice, first.next_cursor))
        assert second.items == []
        assert not second.has_more

    def test_hides_other_users_private_workouts(self, temp_db_path, alice, bob, post_workout):
        post_workout(alice, "Secret", Visibility.PRIVATE)
        post_workout(alice, "Open")

        page = asyncio.run(FeedService(temp_db_path).for_you(bob))
        assert [item.workout.title for item in page.items] == ["Open"]

    def test_negative_cursor_rejected(self, temp_db_path, alice):
        with pytest.raises(ValidationError):
            asyncio.run(FeedService(temp_db_path).for_you(alice, -1))


class TestFollowingFeed:
    """Tests for the "following" feed."""

    def test_empty_when_following_nobody(self, temp_db_path, alice, bob, post_workout):
        post_workout(bob)
        page = asyncio.run(FeedService(temp_db_path).following(alice))

        assert page.tab == FeedTab.FOLLOWING
        assert page.items == []
        assert page.next_cursor is None

    def test_only_followed_authors(self, temp_db_path, make_user, alice, bob, post_workout):
        carol = make_user("Carol Cyclist")
        post_workout(bob, "Bob's lift")
        post_workout(carol, "Carol's ride")
        post_workout(bob, "Bob's friends-only", Visibility.FRIENDS)
        asyncio.run(SocialService(temp_db_path).toggle_follow(alice, bob.id))

        page = asyncio.run(FeedService(temp_db_path).following(alice))
        assert [item.workout.title for item in page.items] == [
            "Bob's friends-only",
            "Bob's lift",
        ]


class TestLikedFeed:
    """Tests for the "liked" feed."""

    def test_liked_workouts_with_viewer_flag(self, temp_db_path, alice, bob, post_workout):
        liked = post_workout(bob, "Liked")
        post_workout(bob, "Not liked")
        asyncio.run(SocialService(temp_db_path).toggle_like(alice, liked.id))

        page = asyncio.run(FeedService(temp_db_path).liked(alice))
        assert len(page.items) == 1
        item = page.items[0]
        assert item.workout.id == liked.id
        assert item.liked_by_viewer is True
        assert item.like_count == 1

    def test_unliking_removes_from_feed(self, temp_db_path, alice, bob, post_workout):
        workout = post_workout(bob)
        social = SocialService(temp_db_path)
        asyncio.run(social.toggle_like(alice, workout.id))
        asyncio.run(social.toggle_like(alice, workout.id))

        assert asyncio.run(FeedService(temp_db_path).liked(alice)).items == []


class TestHydration:
    """Tests for author and engagement hydration."""

    def test_author_fields(self, temp_db_path, alice, bob, post_workout):
        post_workout(alice)
        page = asyncio.run(FeedService(temp_db_path).for_you(bob))

        author = page.items[0].author
        assert author.id == alice.id
        assert author.full_name == "Alice Runner"
        assert author.handle == alice.handle
        assert page.items[0].liked_by_viewer is False

    def test_missing_author_falls_back(self, temp_db_path, alice):
        """Test a workout whose author row is gone still renders."""
        orphan = Workout(user_id="deleted-user", title="Orphan", id="w-orphan")
        items = asyncio.run(FeedService(temp_db_path).hydrate(alice, [orphan]))

        assert items[0].author.full_name == "Unknown User"
        assert items[0].like_count == 0

    def test_comment_counts(self, temp_db_path, alice, bob, post_workout):
        workout = post_workout(alice)
        asyncio.run(SocialService(temp_db_path).add_comment(bob, workout.id, "Great pace"))

        page = asyncio.run(FeedService(temp_db_path).for_you(alice))
        assert page.items[0].comment_count == 1

    def test_profile_feed(self, temp_db_path, alice, bob, post_workout):
        post_workout(alice, "Alice one")
        post_workout(bob, "Bob one")

        page = asyncio.run(FeedService(temp_db_path).profile(bob, alice.id))
        assert page.tab is None
        assert [item.workout.title for item in page.items] == ["Alice one"]
