"""Sign up, sign in and sign out routes."""

import logging

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...config import SESSION_COOKIE, SESSION_TTL_DAYS
from ...errors import FitfeedError
from ...services.auth import AuthService
from ..deps import current_user, get_db_path, get_templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _signed_in_response(token: str) -> RedirectResponse:
    response = RedirectResponse(url="/feed", status_code=302)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=SESSION_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
    )
    return response


def _auth_page(
    request: Request, name: str, error: str | None = None, status_code: int = 200, **values
):
    return get_templates(request).TemplateResponse(
        request,
        name,
        {"user": None, "error": error, **values},
        status_code=status_code,
    )


@router.get("/signup", response_class=HTMLResponse)
async def signup_page(request: Request):
    """Registration form."""
    if await current_user(request):
        return RedirectResponse(url="/feed", status_code=302)
    return _auth_page(request, "signup.html")


@router.post("/signup")
async def signup(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    full_name: str = Form(""),
):
    """Create an account and sign straight in."""
    service = AuthService(get_db_path(request))
    try:
        await service.sign_up(email, password, full_name)
        token = await service.sign_in(email, password)
    except FitfeedError as e:
        logger.warning("Sign up failed for %s: %s", email, e.message)
        return _auth_page(
            request,
            "signup.html",
            error=e.message,
            status_code=e.status_code,
            email=email,
            full_name=full_name,
        )
    return _signed_in_response(token)


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    """Sign-in form."""
    if await current_user(request):
        return RedirectResponse(url="/feed", status_code=302)
    return _auth_page(request, "login.html")


@router.post("/login")
async def login(request: Request, email: str = Form(""), password: str = Form("")):
    """Check credentials and set the session cookie."""
    try:
        token = await AuthService(get_db_path(request)).sign_in(email, password)
    except FitfeedError as e:
        logger.warning("Sign in failed for %s", email)
        return _auth_page(
            request, "login.html", error=e.message, status_code=e.status_code, email=email
        )
    return _signed_in_response(token)


@router.post("/logout")
async def logout(request: Request):
    """End the session and clear the cookie."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        await AuthService(get_db_path(request)).sign_out(token)
    response = RedirectResponse(url="/login", status_code=302)
    response.delete_cookie(SESSION_COOKIE)
    return response
