"""Tests for the database repositories."""

import asyncio
import sqlite3

import pytest

from fitfeed.db import init_db
from fitfeed.db.repositories import (
    CommentRepository,
    ExerciseRepository,
    FollowRepository,
    LikeRepository,
    ProfileRepository,
    WorkoutExerciseRepository,
    WorkoutRepository,
)
from fitfeed.models.social import Comment
from fitfeed.models.workout import Visibility


class TestProfileRepository:
    """Tests for ProfileRepository."""

    def test_credentials_and_lookup(self, temp_db_path, alice):
        """Test profiles can be found by id and email."""
        repo = ProfileRepository(temp_db_path)

        assert asyncio.run(repo.get(alice.id)).email == "alice.runner@example.com"
        profile, password_hash = asyncio.run(repo.get_credentials("alice.runner@example.com"))
        assert profile.id == alice.id
        assert "$" in password_hash
        assert asyncio.run(repo.get_credentials("nobody@example.com")) is None

    def test_get_many_skips_missing(self, temp_db_path, alice, bob):
        repo = ProfileRepository(temp_db_path)
        found = asyncio.run(repo.get_many([alice.id, bob.id, "missing"]))
        assert set(found) == {alice.id, bob.id}

    def test_update_requires_id(self, temp_db_path, alice):
        alice.id = None
        with pytest.raises(ValueError):
            asyncio.run(ProfileRepository(temp_db_path).update(alice))


class TestSchema:
    def test_init_db_is_repeatable(self, temp_db_path, alice):
        """Re-running schema creation keeps existing rows and columns."""
        asyncio.run(init_db(temp_db_path))

        profile = asyncio.run(ProfileRepository(temp_db_path).get(alice.id))
        assert profile.fitness_level is None
        squat = asyncio.run(ExerciseRepository(temp_db_path).get_by_name("Squat"))
        assert "Back Squat" in squat.aliases


class TestLikeRepository:
    """Tests for like toggling and counting."""

    def test_toggle_is_idempotent_pairwise(self, temp_db_path, alice, bob, post_workout):
        """Test a second toggle removes the like and counts follow."""
        workout = post_workout(alice)
        repo = LikeRepository(temp_db_path)

        assert asyncio.run(repo.toggle(bob.id, workout.id)) is True
        assert asyncio.run(repo.count(workout.id)) == 1
        assert asyncio.run(repo.exists(bob.id, workout.id))

        assert asyncio.run(repo.toggle(bob.id, workout.id)) is False
        assert asyncio.run(repo.count(workout.id)) == 0

    def test_duplicate_like_rejected_by_schema(self, temp_db_path, alice, post_workout):
        """Test the (user, workout) pair is unique."""
        workout = post_workout(alice)
        repo = LikeRepository(temp_db_path)
        asyncio.run(repo.toggle(alice.id, workout.id))

        conn = sqlite3.connect(temp_db_path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO likes (user_id, workout_id, created_at) VALUES (?, ?, 'now')",
                    (alice.id, workout.id),
                )
        finally:
            conn.close()

    def test_batch_counts(self, temp_db_path, alice, bob, post_workout):
        first = post_workout(alice, "First")
        second = post_workout(alice, "Second")
        repo = LikeRepository(temp_db_path)
        asyncio.run(repo.toggle(alice.id, first.id))
        asyncio.run(repo.toggle(bob.id, first.id))

        assert asyncio.run(repo.counts_for([first.id, second.id])) == {first.id: 2}
        assert asyncio.run(repo.liked_among(bob.id, [first.id, second.id])) == {first.id}


class TestFollowRepository:
    """Tests for follow edges."""

    def test_toggle_and_counts(self, temp_db_path, alice, bob):
        repo = FollowRepository(temp_db_path)

        assert asyncio.run(repo.toggle(alice.id, bob.id)) is True
        assert asyncio.run(repo.following_ids(alice.id)) == [bob.id]
        assert asyncio.run(repo.follower_count(bob.id)) == 1
        assert asyncio.run(repo.following_count(bob.id)) == 0

        assert asyncio.run(repo.toggle(alice.id, bob.id)) is False
        assert asyncio.run(repo.follower_count(bob.id)) == 0

    def test_self_follow_rejected_by_schema(self, temp_db_path, alice):
        with pytest.raises(sqlite3.IntegrityError):
            asyncio.run(FollowRepository(temp_db_path).toggle(alice.id, alice.id))


class TestWorkoutRepository:
    """Tests for workout queries."""

    def test_visibility_rules(self, temp_db_path, alice, bob, post_workout):
        """Test public, friends-only and private workouts per viewer."""
        public = post_workout(alice, "Public", Visibility.PUBLIC)
        friends = post_workout(alice, "Friends", Visibility.FRIENDS)
        private = post_workout(alice, "Private", Visibility.PRIVATE)
        repo = WorkoutRepository(temp_db_path)

        def visible_to(viewer):
            return {w.id for w in asyncio.run(repo.list_visible(viewer.id, 0, 25))}

        assert visible_to(alice) == {public.id, friends.id, private.id}
        assert visible_to(bob) == {public.id}

        asyncio.run(FollowRepository(temp_db_path).toggle(bob.id, alice.id))
        assert visible_to(bob) == {public.id, friends.id}
        assert asyncio.run(repo.get_visible(private.id, bob.id)) is None

    def test_newest_first(self, temp_db_path, alice, post_workout):
        titles = ["One", "Two", "Three"]
        for title in titles:
            post_workout(alice, title)

        rows = asyncio.run(WorkoutRepository(temp_db_path).list_visible(alice.id, 0, 25))
        assert [w.title for w in rows] == ["Three", "Two", "One"]

    def test_empty_author_filter_returns_nothing(self, temp_db_path, alice, post_workout):
        post_workout(alice)
        rows = asyncio.run(
            WorkoutRepository(temp_db_path).list_visible(alice.id, 0, 25, author_ids=[])
        )
        assert rows == []

    def test_stats(self, temp_db_path, alice, post_workout):
        post_workout(alice)
        post_workout(alice)
        stats = asyncio.run(WorkoutRepository(temp_db_path).get_stats(alice.id))
        assert stats.total_workouts == 2
        assert stats.total_duration == 60

    def test_delete_cascades(self, temp_db_path, alice, bob, post_workout):
        """Test likes and comments go with their workout."""
        workout = post_workout(alice)
        asyncio.run(LikeRepository(temp_db_path).toggle(bob.id, workout.id))
        asyncio.run(
            CommentRepository(temp_db_path).create(
                Comment(workout_id=workout.id, user_id=bob.id, content="Nice")
            )
        )

        asyncio.run(WorkoutRepository(temp_db_path).delete(workout.id))

        assert asyncio.run(LikeRepository(temp_db_path).count(workout.id)) == 0
        assert asyncio.run(CommentRepository(temp_db_path).list_for_workout(workout.id)) == []


class TestCommentRepository:
    def test_newest_first_with_author_name(self, temp_db_path, alice, bob, post_workout):
        workout = post_workout(alice)
        repo = CommentRepository(temp_db_path)
        asyncio.run(repo.create(Comment(workout_id=workout.id, user_id=alice.id, content="first")))
        asyncio.run(repo.create(Comment(workout_id=workout.id, user_id=bob.id, content="second")))

        comments = asyncio.run(repo.list_for_workout(workout.id))
        assert [c.content for c in comments] == ["second", "first"]
        assert comments[0].author_name == "Bob Lifter"
        assert asyncio.run(repo.counts_for([workout.id])) == {workout.id: 2}


class TestExerciseRepositories:
    """Tests for the exercise library and workout exercise links."""

    def test_seeded_library_sorted(self, temp_db_path):
        exercises = asyncio.run(ExerciseRepository(temp_db_path).list_all())
        names = [e.name for e in exercises]
        assert "Bench Press" in names
        assert names == sorted(names, key=str.lower)

    def test_get_by_name_ignores_case(self, temp_db_path):
        exercise = asyncio.run(ExerciseRepository(temp_db_path).get_by_name("bench press"))
        assert exercise.name == "Bench Press"

    def test_add_many_keeps_order_and_skips_repeats(self, temp_db_path, alice, post_workout):
        workout = post_workout(alice)
        library = ExerciseRepository(temp_db_path)
        squat = asyncio.run(library.get_by_name("Squat"))
        bench = asyncio.run(library.get_by_name("Bench Press"))
        repo = WorkoutExerciseRepository(temp_db_path)

        assert asyncio.run(repo.add_many(workout.id, [squat.id, bench.id, squat.id])) == 2
        assert asyncio.run(repo.add_many(workout.id, [bench.id])) == 0

        linked = asyncio.run(repo.list_for_workout(workout.id))
        assert [we.exercise.name for we in linked] == ["Squat", "Bench Press"]
        assert [we.order_position for we in linked] == [0, 1]
