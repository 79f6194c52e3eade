"""Feed routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...errors import ValidationError
from ...models.profile import Profile
from ...models.workout import FeedTab, Visibility
from ...services.exercises import ExerciseService
from ...services.feed import FeedService
from ..deps import current_user, get_db_path, get_templates, login_redirect, require_user

router = APIRouter(tags=["feed"])


def parse_tab(tab: str) -> FeedTab:
    try:
        return FeedTab(tab)
    except ValueError:
        raise ValidationError(f"Unknown feed '{tab}'") from None


@router.get("/feed", response_class=HTMLResponse)
async def feed_page(
    request: Request,
    tab: str = FeedTab.FOR_YOU.value,
    cursor: int = 0,
    error: str | None = None,
    message: str | None = None,
):
    """Feed page with the workout composer."""
    user = await current_user(request)
    if user is None:
        return login_redirect()

    db_path = get_db_path(request)
    page = await FeedService(db_path).get_feed(user, parse_tab(tab), cursor)
    exercises = await ExerciseService(db_path).list_exercises()

    return get_templates(request).TemplateResponse(
        request,
        "feed.html",
        {
            "user": user,
            "page": page,
            "tabs": list(FeedTab),
            "visibilities": [v.value for v in Visibility],
            "exercises": exercises,
            "error": error,
            "message": message,
        },
    )


@router.get("/api/feed")
async def feed_json(
    request: Request,
    tab: str = FeedTab.FOR_YOU.value,
    cursor: int = 0,
    user: Profile = Depends(require_user),
):
    """One feed page as JSON, for infinite scrolling."""
    page = await FeedService(get_db_path(request)).get_feed(user, parse_tab(tab), cursor)
    return page.to_dict()
