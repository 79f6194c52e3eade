"""Exercise library routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...models.profile import Profile
from ...services.exercises import ExerciseService
from ...utils.exercise_utils import group_by_muscle
from ..deps import current_user, get_db_path, get_templates, login_redirect, require_user

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_class=HTMLResponse)
async def exercises_page(request: Request, q: str | None = None):
    """Browse and search the exercise library."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    exercises = await ExerciseService(get_db_path(request)).list_exercises(q)
    return get_templates(request).TemplateResponse(
        request,
        "exercises.html",
        {
            "user": user,
            "query": q or "",
            "exercises": exercises,
            "grouped": group_by_muscle(exercises),
        },
    )


@router.get("/{exercise_id}")
async def exercise_detail(
    request: Request, exercise_id: int, user: Profile = Depends(require_user)
):
    """One exercise as JSON."""
    exercise = await ExerciseService(get_db_path(request)).get_exercise(exercise_id)
    return exercise.to_dict()
