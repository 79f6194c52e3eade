"""Creating, viewing and deleting workouts."""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import (
    IMAGES_BUCKET,
    MAX_DURATION_MINUTES,
    MAX_TITLE_LENGTH,
    MIN_DURATION_MINUTES,
)
from ..db.repositories import (
    CommentRepository,
    ExerciseRepository,
    ShareRepository,
    WorkoutExerciseRepository,
    WorkoutRepository,
)
from ..errors import FitfeedError, NotFoundError, PermissionDeniedError, ValidationError
from ..models.profile import Profile
from ..models.workout import Attachment, Visibility, Workout, WorkoutDetail, WorkoutDraft
from ..storage import LocalStorage, validate_image
from .feed import FeedService

logger = logging.getLogger(__name__)


@dataclass
class CreateWorkoutResult:
    """Outcome of posting a workout.

    The workout row always exists; the flags report whether the optional
    image and exercise steps also went through.
    """

    workout: Workout
    image_saved: bool = True
    exercises_saved: bool = True

    @property
    def has_issues(self) -> bool:
        return not (self.image_saved and self.exercises_saved)

    @property
    def message(self) -> str:
        if not self.has_issues:
            return "Workout posted"
        failed = []
        if not self.image_saved:
            failed.append("the image")
        if not self.exercises_saved:
            failed.append("the exercises")
        return f"Workout created with issues: {' and '.join(failed)} couldn't be saved"


def build_workout(user: Profile, draft: WorkoutDraft) -> Workout:
    """Validate form input into an unsaved Workout."""
    title = draft.title.strip()
    if not title:
        raise ValidationError("Please provide a title for your workout")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

    try:
        visibility = Visibility(draft.visibility)
    except ValueError:
        raise ValidationError(f"Unknown visibility '{draft.visibility}'") from None

    duration = max(MIN_DURATION_MINUTES, min(MAX_DURATION_MINUTES, draft.duration_minutes))

    return Workout(
        user_id=user.id,
        title=title,
        description=draft.description.strip(),
        duration_minutes=duration,
        visibility=visibility,
    )


class WorkoutService:
    """Workout lifecycle operations."""

    def __init__(self, db_path: Path | None = None, storage: LocalStorage | None = None):
        self.storage = storage or LocalStorage()
        self.workouts = WorkoutRepository(db_path)
        self.exercises = ExerciseRepository(db_path)
        self.workout_exercises = WorkoutExerciseRepository(db_path)
        self.comments = CommentRepository(db_path)
        self.shares = ShareRepository(db_path)
        self.feed = FeedService(db_path)

    async def create_workout(
        self,
        user: Profile,
        draft: WorkoutDraft,
        attachment: Attachment | None = None,
        exercise_ids: list[int] | None = None,
    ) -> CreateWorkoutResult:
        """Post a workout, then its image, then its exercises.

        Steps after the insert are best effort: a failure there is logged and
        reported on the result but does not remove the workout.
        """
        workout = build_workout(user, draft)
        if attachment is not None:
            validate_image(attachment)

        await self.workouts.create(workout)
        logger.info("User %s created workout %s", user.id, workout.id)
        result = CreateWorkoutResult(workout=workout)

        if attachment is not None:
            try:
                stored_path = self.storage.upload(
                    IMAGES_BUCKET, workout.id, attachment.content, upsert=True
                )
                await self.workouts.set_attachment(workout.id, stored_path)
                workout.attachment_url = stored_path
            except (OSError, FitfeedError) as e:
                logger.error("Image upload failed for workout %s: %s", workout.id, e)
                result.image_saved = False

        if exercise_ids:
            result.exercises_saved = await self._attach_exercises(workout.id, exercise_ids)

        return result

    async def _attach_exercises(self, workout_id: str, exercise_ids: list[int]) -> bool:
        requested = list(dict.fromkeys(exercise_ids))
        known = await self.exercises.existing_ids(requested)
        valid = [exercise_id for exercise_id in requested if exercise_id in known]
        if len(valid) != len(requested):
            logger.warning(
                "Skipping unknown exercises for workout %s: %s",
                workout_id,
                [exercise_id for exercise_id in requested if exercise_id not in known],
            )
        if not valid:
            return False
        added = await self.workout_exercises.add_many(workout_id, valid)
        return added == len(requested)

    async def get_workout_detail(self, viewer: Profile, workout_id: str) -> WorkoutDetail:
        """Load a workout with everything the detail page shows."""
        workout = await self.workouts.get_visible(workout_id, viewer.id)
        if workout is None:
            raise NotFoundError("Workout not found")

        items = await self.feed.hydrate(viewer, [workout])
        return WorkoutDetail(
            item=items[0],
            exercises=await self.workout_exercises.list_for_workout(workout_id),
            comments=await self.comments.list_for_workout(workout_id),
            share_count=await self.shares.count(workout_id),
            is_owner=workout.user_id == viewer.id,
        )

    async def delete_workout(self, user: Profile, workout_id: str) -> None:
        """Delete one of the user's own workouts and its image."""
        workout = await self.workouts.get(workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        if workout.user_id != user.id:
            raise PermissionDeniedError("You can only delete your own workouts")

        await self.workouts.delete(workout_id)
        if workout.attachment_url:
            self.storage.remove(IMAGES_BUCKET, workout.attachment_url)
        logger.info("User %s deleted workout %s", user.id, workout_id)
