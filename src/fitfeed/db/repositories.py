"""Data access layer for fitfeed."""

import json
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import aiosqlite

from ..models.exercises import EquipmentType, Exercise, ExerciseCategory, MuscleGroup
from ..models.profile import FitnessLevel, Profile, Session, UserStats
from ..models.social import Comment
from ..models.workout import Visibility, Workout, WorkoutExercise
from ..utils.helpers import format_timestamp, parse_timestamp, utc_now
from .engine import connect, get_db_path

# A workout is visible to a viewer when it is public, authored by the viewer,
# or friends-only and the viewer follows the author.
VISIBLE_TO_VIEWER = """
    (w.visibility = 'public'
     OR w.user_id = ?
     OR (w.visibility = 'friends' AND EXISTS (
         SELECT 1 FROM following f
         WHERE f.follower_id = ? AND f.following_id = w.user_id)))
"""


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


def _new_id() -> str:
    return str(uuid4())


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: Profile, password_hash: str) -> str:
        """Create a new profile and return its ID."""
        profile_id = profile.id or _new_id()
        now = format_timestamp(utc_now())
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO profiles
                (id, email, full_name, handle, password_hash, avatar_url, bio,
                 fitness_level, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    profile_id,
                    profile.email,
                    profile.full_name,
                    profile.handle,
                    password_hash,
                    profile.avatar_url,
                    profile.bio,
                    profile.fitness_level.value if profile.fitness_level else None,
                    now,
                    now,
                ),
            )
            await db.commit()
        return profile_id

    async def get(self, profile_id: str) -> Profile | None:
        """Get a profile by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM profiles WHERE id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by (normalised) email."""
        credentials = await self.get_credentials(email)
        return credentials[0] if credentials else None

    async def get_credentials(self, email: str) -> tuple[Profile, str] | None:
        """Get a profile together with its stored password hash."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM profiles WHERE email = ?", (email,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row), row["password_hash"]

    async def get_many(self, profile_ids: list[str]) -> dict[str, Profile]:
        """Get several profiles keyed by ID; missing IDs are left out."""
        ids = list(dict.fromkeys(profile_ids))
        if not ids:
            return {}
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT * FROM profiles WHERE id IN ({_placeholders(len(ids))})",
                ids,
            )
            rows = await cursor.fetchall()
            return {row["id"]: self._row_to_profile(row) for row in rows}

    async def handle_exists(self, handle: str) -> bool:
        """Check whether a handle is taken."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM profiles WHERE handle = ?", (handle,)
            )
            return await cursor.fetchone() is not None

    async def list_all(self) -> list[Profile]:
        """List all profiles, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM profiles ORDER BY created_at DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_profile(row) for row in rows]

    async def update(self, profile: Profile) -> None:
        """Update the editable fields of an existing profile."""
        if profile.id is None:
            raise ValueError("Profile must have an ID to update")

        profile.updated_at = utc_now()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE profiles SET
                    full_name = ?, bio = ?, fitness_level = ?, avatar_url = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    profile.full_name,
                    profile.bio,
                    profile.fitness_level.value if profile.fitness_level else None,
                    profile.avatar_url,
                    format_timestamp(profile.updated_at),
                    profile.id,
                ),
            )
            await db.commit()

    def _row_to_profile(self, row: aiosqlite.Row) -> Profile:
        """Convert a database row to a Profile."""
        return Profile(
            id=row["id"],
            email=row["email"],
            full_name=row["full_name"],
            handle=row["handle"],
            avatar_url=row["avatar_url"],
            bio=row["bio"] or "",
            fitness_level=FitnessLevel(row["fitness_level"]) if row["fitness_level"] else None,
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


class SessionRepository:
    """Repository for browser sessions."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: Session) -> None:
        """Store a new session."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO sessions (token, user_id, expires_at, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    session.token,
                    session.user_id,
                    format_timestamp(session.expires_at),
                    format_timestamp(session.created_at or utc_now()),
                ),
            )
            await db.commit()

    async def get(self, token: str) -> Session | None:
        """Get a session by token."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM sessions WHERE token = ?", (token,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return Session(
                token=row["token"],
                user_id=row["user_id"],
                expires_at=parse_timestamp(row["expires_at"]),
                created_at=parse_timestamp(row["created_at"]),
            )

    async def delete(self, token: str) -> None:
        """Delete a session."""
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM sessions WHERE token = ?", (token,))
            await db.commit()

    async def delete_expired(self, now: datetime) -> int:
        """Delete all sessions that expired before now."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM sessions WHERE expires_at <= ?", (format_timestamp(now),)
            )
            await db.commit()
            return cursor.rowcount


class WorkoutRepository:
    """Repository for workout posts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, workout: Workout) -> str:
        """Create a new workout and return its ID."""
        workout.id = workout.id or _new_id()
        workout.created_at = workout.created_at or utc_now()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workouts
                (id, user_id, title, description, duration_minutes, visibility,
                 attachment_url, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    workout.id,
                    workout.user_id,
                    workout.title,
                    workout.description,
                    workout.duration_minutes,
                    workout.visibility.value,
                    workout.attachment_url,
                    format_timestamp(workout.created_at),
                ),
            )
            await db.commit()
        return workout.id

    async def get(self, workout_id: str) -> Workout | None:
        """Get a workout by ID, regardless of visibility."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workouts WHERE id = ?", (workout_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_workout(row)

    async def get_visible(self, workout_id: str, viewer_id: str) -> Workout | None:
        """Get a workout if the viewer is allowed to see it."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT w.* FROM workouts w WHERE w.id = ? AND {VISIBLE_TO_VIEWER}",
                (workout_id, viewer_id, viewer_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_workout(row)

    async def list_visible(
        self,
        viewer_id: str,
        offset: int,
        limit: int,
        author_ids: list[str] | None = None,
        author_id: str | None = None,
        liked_by: str | None = None,
    ) -> list[Workout]:
        """List workouts visible to the viewer, newest first.

        Args:
            viewer_id: Profile whose visibility rules apply
            offset: Index of the first row to return
            limit: Maximum rows to return
            author_ids: Only workouts by these authors (empty list -> no rows)
            author_id: Only workouts by this author
            liked_by: Only workouts this profile has liked

        Returns:
            Workouts ordered by creation time, most recent first
        """
        clauses = [VISIBLE_TO_VIEWER]
        params: list = [viewer_id, viewer_id]

        if author_ids is not None:
            if not author_ids:
                return []
            clauses.append(f"w.user_id IN ({_placeholders(len(author_ids))})")
            params.extend(author_ids)

        if author_id is not None:
            clauses.append("w.user_id = ?")
            params.append(author_id)

        if liked_by is not None:
            clauses.append("w.id IN (SELECT workout_id FROM likes WHERE user_id = ?)")
            params.append(liked_by)

        params.extend([limit, offset])
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                SELECT w.* FROM workouts w
                WHERE {" AND ".join(clauses)}
                ORDER BY w.created_at DESC, w.rowid DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    async def list_attachments(self, user_id: str, viewer_id: str) -> list[str]:
        """List attachment paths of a user's workouts visible to the viewer."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                SELECT w.attachment_url FROM workouts w
                WHERE w.user_id = ? AND w.attachment_url IS NOT NULL
                  AND w.attachment_url != '' AND {VISIBLE_TO_VIEWER}
                ORDER BY w.created_at DESC, w.rowid DESC
                """,
                (user_id, viewer_id, viewer_id),
            )
            rows = await cursor.fetchall()
            return [row["attachment_url"] for row in rows]

    async def list_all(self, user_id: str | None = None) -> list[Workout]:
        """List every workout (optionally for one author), newest first."""
        async with connect(self.db_path) as db:
            if user_id:
                cursor = await db.execute(
                    """
                    SELECT * FROM workouts WHERE user_id = ?
                    ORDER BY created_at DESC, rowid DESC
                    """,
                    (user_id,),
                )
            else:
                cursor = await db.execute(
                    "SELECT * FROM workouts ORDER BY created_at DESC, rowid DESC"
                )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    async def get_stats(self, user_id: str) -> UserStats:
        """Count a user's workouts and total their minutes."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT COUNT(*) AS total_workouts,
                       COALESCE(SUM(duration_minutes), 0) AS total_duration
                FROM workouts WHERE user_id = ?
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            return UserStats(
                user_id=user_id,
                total_workouts=row["total_workouts"],
                total_duration=row["total_duration"],
            )

    async def set_attachment(self, workout_id: str, attachment_url: str | None) -> None:
        """Point a workout at its stored attachment."""
        async with connect(self.db_path) as db:
            await db.execute(
                "UPDATE workouts SET attachment_url = ? WHERE id = ?",
                (attachment_url, workout_id),
            )
            await db.commit()

    async def delete(self, workout_id: str) -> None:
        """Delete a workout; likes, comments and exercises cascade."""
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM workouts WHERE id = ?", (workout_id,))
            await db.commit()

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        """Convert a database row to a Workout."""
        return Workout(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"] or "",
            duration_minutes=row["duration_minutes"],
            visibility=Visibility(row["visibility"]),
            attachment_url=row["attachment_url"] or None,
            created_at=parse_timestamp(row["created_at"]),
        )


class LikeRepository:
    """Repository for workout likes."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def toggle(self, user_id: str, workout_id: str) -> bool:
        """Remove the like if present, otherwise add it.

        Returns:
            True if the workout is now liked by the user
        """
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM likes WHERE user_id = ? AND workout_id = ?",
                (user_id, workout_id),
            )
            if cursor.rowcount:
                liked = False
            else:
                await db.execute(
                    "INSERT INTO likes (user_id, workout_id, created_at) VALUES (?, ?, ?)",
                    (user_id, workout_id, format_timestamp(utc_now())),
                )
                liked = True
            await db.commit()
            return liked

    async def exists(self, user_id: str, workout_id: str) -> bool:
        """Check whether the user has liked the workout."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM likes WHERE user_id = ? AND workout_id = ?",
                (user_id, workout_id),
            )
            return await cursor.fetchone() is not None

    async def count(self, workout_id: str) -> int:
        """Count likes on a workout."""
        counts = await self.counts_for([workout_id])
        return counts.get(workout_id, 0)

    async def counts_for(self, workout_ids: list[str]) -> dict[str, int]:
        """Like counts keyed by workout ID (workouts with no likes omitted)."""
        if not workout_ids:
            return {}
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                SELECT workout_id, COUNT(*) AS n FROM likes
                WHERE workout_id IN ({_placeholders(len(workout_ids))})
                GROUP BY workout_id
                """,
                workout_ids,
            )
            rows = await cursor.fetchall()
            return {row["workout_id"]: row["n"] for row in rows}

    async def liked_among(self, user_id: str, workout_ids: list[str]) -> set[str]:
        """Which of the given workouts the user has liked."""
        if not workout_ids:
            return set()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                SELECT workout_id FROM likes
                WHERE user_id = ? AND workout_id IN ({_placeholders(len(workout_ids))})
                """,
                [user_id, *workout_ids],
            )
            rows = await cursor.fetchall()
            return {row["workout_id"] for row in rows}


class FollowRepository:
    """Repository for follow edges."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def toggle(self, follower_id: str, following_id: str) -> bool:
        """Unfollow if the edge exists, otherwise follow.

        Returns:
            True if the follower now follows the other profile
        """
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM following WHERE follower_id = ? AND following_id = ?",
                (follower_id, following_id),
            )
            if cursor.rowcount:
                following = False
            else:
                await db.execute(
                    """
                    INSERT INTO following (follower_id, following_id, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (follower_id, following_id, format_timestamp(utc_now())),
                )
                following = True
            await db.commit()
            return following

    async def exists(self, follower_id: str, following_id: str) -> bool:
        """Check whether follower_id follows following_id."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM following WHERE follower_id = ? AND following_id = ?",
                (follower_id, following_id),
            )
            return await cursor.fetchone() is not None

    async def following_ids(self, follower_id: str) -> list[str]:
        """IDs of the profiles a user follows."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT following_id FROM following WHERE follower_id = ?",
                (follower_id,),
            )
            rows = await cursor.fetchall()
            return [row["following_id"] for row in rows]

    async def follower_count(self, profile_id: str) -> int:
        """Number of profiles following this one."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM following WHERE following_id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def following_count(self, profile_id: str) -> int:
        """Number of profiles this one follows."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM following WHERE follower_id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def list_follower_ids(self, profile_id: str) -> list[str]:
        """IDs of the profiles following this one, most recent first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT follower_id FROM following WHERE following_id = ?
                ORDER BY created_at DESC
                """,
                (profile_id,),
            )
            rows = await cursor.fetchall()
            return [row["follower_id"] for row in rows]


class CommentRepository:
    """Repository for workout comments."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, comment: Comment) -> str:
        """Create a new comment and return its ID."""
        comment.id = comment.id or _new_id()
        comment.created_at = comment.created_at or utc_now()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO comments (id, user_id, workout_id, content, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    comment.id,
                    comment.user_id,
                    comment.workout_id,
                    comment.content,
                    format_timestamp(comment.created_at),
                ),
            )
            await db.commit()
        return comment.id

    async def list_for_workout(self, workout_id: str) -> list[Comment]:
        """Comments on a workout, newest first, with author names."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT c.*, p.full_name AS author_name
                FROM comments c LEFT JOIN profiles p ON p.id = c.user_id
                WHERE c.workout_id = ?
                ORDER BY c.created_at DESC, c.rowid DESC
                """,
                (workout_id,),
            )
            rows = await cursor.fetchall()
            return [
                Comment(
                    id=row["id"],
                    workout_id=row["workout_id"],
                    user_id=row["user_id"],
                    content=row["content"],
                    created_at=parse_timestamp(row["created_at"]),
                    author_name=row["author_name"] or "Unknown User",
                )
                for row in rows
            ]

    async def counts_for(self, workout_ids: list[str]) -> dict[str, int]:
        """Comment counts keyed by workout ID."""
        if not workout_ids:
            return {}
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                SELECT workout_id, COUNT(*) AS n FROM comments
                WHERE workout_id IN ({_placeholders(len(workout_ids))})
                GROUP BY workout_id
                """,
                workout_ids,
            )
            rows = await cursor.fetchall()
            return {row["workout_id"]: row["n"] for row in rows}


class ShareRepository:
    """Repository for in-app reposts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, workout_id: str, user_id: str) -> int:
        """Record a share."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO shares (workout_id, user_id, created_at) VALUES (?, ?, ?)",
                (workout_id, user_id, format_timestamp(utc_now())),
            )
            await db.commit()
            return cursor.lastrowid

    async def count(self, workout_id: str) -> int:
        """Count shares of a workout."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM shares WHERE workout_id = ?", (workout_id,)
            )
            row = await cursor.fetchone()
            return row[0]


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, exercise: Exercise) -> int:
        """Add a new exercise."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO exercises
                (name, category, muscle_group, secondary_muscle, equipment,
                 description, image_url, aliases)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                self._exercise_params(exercise),
            )
            await db.commit()
            return cursor.lastrowid

    async def add_missing(self, exercises: list[Exercise]) -> int:
        """Insert exercises whose names are not in the library yet."""
        async with connect(self.db_path) as db:
            count = 0
            for exercise in exercises:
                cursor = await db.execute(
                    """
                    INSERT OR IGNORE INTO exercises
                    (name, category, muscle_group, secondary_muscle, equipment,
                     description, image_url, aliases)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    self._exercise_params(exercise),
                )
                count += cursor.rowcount
            await db.commit()
            return count

    async def get(self, exercise_id: int) -> Exercise | None:
        """Get an exercise by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def get_by_name(self, name: str) -> Exercise | None:
        """Get an exercise by name, ignoring case."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE name = ? COLLATE NOCASE", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def list_all(self) -> list[Exercise]:
        """List all exercises ordered by name."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises ORDER BY name COLLATE NOCASE"
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def existing_ids(self, exercise_ids: list[int]) -> set[int]:
        """Which of the given IDs exist in the library."""
        if not exercise_ids:
            return set()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT id FROM exercises WHERE id IN ({_placeholders(len(exercise_ids))})",
                exercise_ids,
            )
            rows = await cursor.fetchall()
            return {row["id"] for row in rows}

    def _exercise_params(self, exercise: Exercise) -> tuple:
        return (
            exercise.name,
            exercise.category.value,
            exercise.muscle_group.value,
            exercise.secondary_muscle.value if exercise.secondary_muscle else None,
            json.dumps([eq.value for eq in exercise.equipment]),
            exercise.description,
            exercise.image_url,
            json.dumps(exercise.aliases),
        )

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            category=ExerciseCategory(row["category"]),
            muscle_group=MuscleGroup(row["muscle_group"]),
            secondary_muscle=MuscleGroup(row["secondary_muscle"]) if row["secondary_muscle"] else None,
            equipment=[EquipmentType(eq) for eq in json.loads(row["equipment"] or "[]")],
            description=row["description"] or "",
            image_url=row["image_url"],
            aliases=json.loads(row["aliases"] or "[]"),
        )


class WorkoutExerciseRepository:
    """Repository for the exercises attached to workouts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add_many(self, workout_id: str, exercise_ids: list[int]) -> int:
        """Attach exercises in the given order; repeats are ignored.

        Returns:
            Number of exercises attached
        """
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COALESCE(MAX(order_position), -1) FROM workout_exercises WHERE workout_id = ?",
                (workout_id,),
            )
            row = await cursor.fetchone()
            position = row[0] + 1
            added = 0
            for exercise_id in exercise_ids:
                cursor = await db.execute(
                    """
                    INSERT OR IGNORE INTO workout_exercises
                    (workout_id, exercise_id, order_position)
                    VALUES (?, ?, ?)
                    """,
                    (workout_id, exercise_id, position),
                )
                if cursor.rowcount:
                    added += 1
                    position += 1
            await db.commit()
            return added

    async def list_for_workout(self, workout_id: str) -> list[WorkoutExercise]:
        """Exercises attached to a workout, in order."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT we.id AS we_id, we.workout_id, we.exercise_id, we.order_position,
                       e.*
                FROM workout_exercises we JOIN exercises e ON e.id = we.exercise_id
                WHERE we.workout_id = ?
                ORDER BY we.order_position
                """,
                (workout_id,),
            )
            rows = await cursor.fetchall()
            exercise_repo = ExerciseRepository(self.db_path)
            return [
                WorkoutExercise(
                    id=row["we_id"],
                    workout_id=row["workout_id"],
                    exercise_id=row["exercise_id"],
                    order_position=row["order_position"],
                    exercise=exercise_repo._row_to_exercise(row),
                )
                for row in rows
            ]
