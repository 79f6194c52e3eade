"""Request-scoped helpers shared by the routers."""

from pathlib import Path
from urllib.parse import urlencode

from fastapi import HTTPException, Request
from fastapi.responses import RedirectResponse

from ..config import SESSION_COOKIE
from ..models.profile import Profile
from ..services.auth import AuthService
from ..storage import LocalStorage


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


def get_db_path(request: Request) -> Path:
    return request.app.state.db_path


def get_storage(request: Request) -> LocalStorage:
    return request.app.state.storage


async def current_user(request: Request) -> Profile | None:
    """Profile behind the session cookie, if any."""
    token = request.cookies.get(SESSION_COOKIE)
    return await AuthService(get_db_path(request)).get_user_for_token(token)


async def require_user(request: Request) -> Profile:
    """Dependency for JSON endpoints; answers 401 without a valid session."""
    user = await current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def login_redirect() -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=302)


def redirect_with(url: str, **params: str) -> RedirectResponse:
    """Redirect carrying flash values such as ``error`` or ``message``."""
    query = urlencode({k: v for k, v in params.items() if v is not None})
    return RedirectResponse(url=f"{url}?{query}" if query else url, status_code=302)
