"""Workout routes: posting, viewing and engagement actions."""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from ...config import DEFAULT_DURATION_MINUTES
from ...errors import FitfeedError
from ...models.profile import Profile
from ...models.workout import Attachment, Visibility, WorkoutDraft
from ...services.social import SocialService, share_link
from ...services.workouts import WorkoutService
from ..deps import (
    current_user,
    get_db_path,
    get_storage,
    get_templates,
    login_redirect,
    redirect_with,
    require_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


async def read_upload(upload: UploadFile | None) -> Attachment | None:
    """Turn a form file field into an Attachment; an empty field is no upload."""
    if upload is None or not upload.filename:
        return None
    return Attachment(
        filename=upload.filename,
        content_type=upload.content_type or "",
        content=await upload.read(),
    )


@router.post("")
async def create_workout(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    duration_minutes: str = Form(""),
    visibility: str = Form(Visibility.PUBLIC.value),
    exercise_ids: list[int] = Form(default=[]),
    attachment: UploadFile | None = File(None),
):
    """Post a workout from the feed composer."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    try:
        minutes = int(duration_minutes) if duration_minutes.strip() else DEFAULT_DURATION_MINUTES
    except ValueError:
        return redirect_with("/feed", error="Duration must be a whole number of minutes")

    draft = WorkoutDraft(
        title=title,
        description=description,
        duration_minutes=minutes,
        visibility=visibility,
    )
    service = WorkoutService(get_db_path(request), get_storage(request))
    try:
        result = await service.create_workout(
            user, draft, await read_upload(attachment), exercise_ids
        )
    except FitfeedError as e:
        logger.warning("Workout from %s rejected: %s", user.id, e.message)
        return redirect_with("/feed", error=e.message)

    if result.has_issues:
        return redirect_with("/feed", error=result.message)
    return redirect_with("/feed", message=result.message)


@router.get("/{workout_id}", response_class=HTMLResponse)
async def workout_page(request: Request, workout_id: str):
    """Workout detail page with exercises and comments."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    service = WorkoutService(get_db_path(request), get_storage(request))
    detail = await service.get_workout_detail(user, workout_id)
    return get_templates(request).TemplateResponse(
        request,
        "workout.html",
        {"user": user, "detail": detail, "item": detail.item},
    )


@router.post("/{workout_id}/delete")
async def delete_workout(request: Request, workout_id: str):
    """Delete one of your own workouts."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    service = WorkoutService(get_db_path(request), get_storage(request))
    await service.delete_workout(user, workout_id)
    return redirect_with("/feed", message="Workout deleted")


@router.post("/{workout_id}/like")
async def toggle_like(request: Request, workout_id: str, user: Profile = Depends(require_user)):
    """Like or unlike a workout."""
    liked, like_count = await SocialService(get_db_path(request)).toggle_like(user, workout_id)
    return {"liked": liked, "like_count": like_count}


@router.get("/{workout_id}/comments")
async def list_comments(request: Request, workout_id: str, user: Profile = Depends(require_user)):
    """Comments on a workout, newest first."""
    comments = await SocialService(get_db_path(request)).list_comments(user, workout_id)
    return {"comments": [c.to_dict() for c in comments]}


@router.post("/{workout_id}/comments")
async def add_comment(
    request: Request,
    workout_id: str,
    content: str = Form(""),
    user: Profile = Depends(require_user),
):
    """Comment on a workout."""
    comment = await SocialService(get_db_path(request)).add_comment(user, workout_id, content)
    return {"comment": comment.to_dict()}


@router.post("/{workout_id}/share")
async def share_workout(request: Request, workout_id: str, user: Profile = Depends(require_user)):
    """Repost a workout and return its share link."""
    share_count = await SocialService(get_db_path(request)).share_workout(user, workout_id)
    return {
        "share_count": share_count,
        "link": share_link(str(request.base_url), workout_id),
    }
