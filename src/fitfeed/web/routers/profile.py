"""User profile routes."""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from ...errors import FitfeedError
from ...models.profile import FitnessLevel, Profile
from ...services.profiles import ProfileService
from ...services.social import SocialService
from ..deps import (
    current_user,
    get_db_path,
    get_storage,
    get_templates,
    login_redirect,
    redirect_with,
    require_user,
)
from .workouts import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


async def _render_profile(request: Request, user: Profile, profile_id: str):
    service = ProfileService(get_db_path(request), get_storage(request))
    page = await service.get_profile_page(user, profile_id)
    return get_templates(request).TemplateResponse(
        request,
        "profile.html",
        {
            "user": user,
            "page": page,
            "fitness_levels": [level.value for level in FitnessLevel],
            "saved": request.query_params.get("saved") == "true",
            "error": request.query_params.get("error"),
        },
    )


@router.get("", response_class=HTMLResponse)
async def own_profile_page(request: Request):
    """The signed-in user's profile."""
    user = await current_user(request)
    if user is None:
        return login_redirect()
    return await _render_profile(request, user, user.id)


@router.post("/edit")
async def edit_profile(
    request: Request,
    bio: str | None = Form(None),
    full_name: str | None = Form(None),
    fitness_level: str | None = Form(None),
):
    """Save bio, name and fitness level."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    service = ProfileService(get_db_path(request), get_storage(request))
    try:
        await service.update_profile(
            user, bio=bio, full_name=full_name, fitness_level=fitness_level
        )
    except FitfeedError as e:
        logger.warning("Profile edit for %s rejected: %s", user.id, e.message)
        return redirect_with("/profile", error=e.message)
    return redirect_with("/profile", saved="true")


@router.post("/avatar")
async def update_avatar(
    request: Request,
    avatar: UploadFile | None = File(None),
    remove: bool = Form(False),
):
    """Upload a new avatar, or remove the current one."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    upload = None if remove else await read_upload(avatar)
    if upload is None and not remove:
        return redirect_with("/profile", error="Please select an image file")

    service = ProfileService(get_db_path(request), get_storage(request))
    try:
        await service.update_avatar(user, upload)
    except FitfeedError as e:
        logger.warning("Avatar upload for %s rejected: %s", user.id, e.message)
        return redirect_with("/profile", error=e.message)
    return redirect_with("/profile", saved="true")


@router.get("/{profile_id}", response_class=HTMLResponse)
async def profile_page(request: Request, profile_id: str):
    """Another user's profile."""
    user = await current_user(request)
    if user is None:
        return login_redirect()
    return await _render_profile(request, user, profile_id)


@router.post("/{profile_id}/follow")
async def toggle_follow(request: Request, profile_id: str, user: Profile = Depends(require_user)):
    """Follow or unfollow a user."""
    following, follower_count = await SocialService(get_db_path(request)).toggle_follow(
        user, profile_id
    )
    return {"following": following, "follower_count": follower_count}


@router.get("/{profile_id}/workouts")
async def profile_workouts(
    request: Request, profile_id: str, cursor: int = 0, user: Profile = Depends(require_user)
):
    """One page of a user's workouts as JSON."""
    service = ProfileService(get_db_path(request), get_storage(request))
    page = await service.list_workouts(user, profile_id, cursor)
    return page.to_dict()


@router.get("/{profile_id}/followers")
async def followers(request: Request, profile_id: str, user: Profile = Depends(require_user)):
    """Profiles following this user."""
    service = ProfileService(get_db_path(request), get_storage(request))
    profiles = await service.list_followers(profile_id)
    return {"profiles": [p.to_public_dict() for p in profiles]}


@router.get("/{profile_id}/following")
async def following(request: Request, profile_id: str, user: Profile = Depends(require_user)):
    """Profiles this user follows."""
    service = ProfileService(get_db_path(request), get_storage(request))
    profiles = await service.list_following(profile_id)
    return {"profiles": [p.to_public_dict() for p in profiles]}
