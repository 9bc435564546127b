"""Google sign-in, logout and current-user endpoints."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from photo_editor.api.deps import get_container, require_principal
from photo_editor.api.schemas import serialize_principal
from photo_editor.domain.errors import UnauthenticatedError
from photo_editor.domain.users import Principal  # noqa: TC001

if TYPE_CHECKING:
    from photo_editor.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

STATE_COOKIE = "oauth_state"
_STATE_MAX_AGE = 10 * 60


@router.get("/auth/google")
async def google_login(request: Request) -> RedirectResponse:
    """Redirect the browser to the Google consent screen."""
    container = get_container(request)
    state = secrets.token_urlsafe(24)
    response = RedirectResponse(container.auth_service.begin_auth(state))
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=_STATE_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=container.settings.session_cookie_secure,
    )
    return response


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Finish sign-in and hand the token to the frontend."""
    container = get_container(request)
    expected_state = request.cookies.get(STATE_COOKIE)
    if error or not code:
        logger.warning("Google OAuth callback without code", extra={"error": error})
        return _failure_redirect()
    if not state or not expected_state or not secrets.compare_digest(
        state, expected_state
    ):
        logger.warning("Google OAuth state mismatch")
        return _failure_redirect()
    try:
        principal = await container.auth_service.complete_auth(code)
    except UnauthenticatedError:
        return _failure_redirect()

    settings = container.settings
    token = container.auth_service.issue_token(principal)
    query = urlencode({"token": token})
    response = RedirectResponse(
        f"{settings.frontend_url.rstrip('/')}{settings.oauth_success_path}?{query}"
    )
    _set_session_cookie(response, settings, token)
    response.delete_cookie(STATE_COOKIE)
    logger.info("User signed in", extra={"principal_id": principal.id})
    return response


@router.get("/auth/failure")
async def auth_failure() -> PlainTextResponse:
    """Landing route for failed sign-ins."""
    return PlainTextResponse(
        "Google OAuth failed", status_code=status.HTTP_401_UNAUTHORIZED
    )


@router.get("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Clear the session cookie and return to the frontend."""
    settings = get_container(request).settings
    response = RedirectResponse(settings.frontend_url)
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.get("/me")
async def me(principal: Principal = Depends(require_principal)) -> dict[str, object]:  # noqa: B008
    """Return the signed-in user."""
    return {"success": True, "user": serialize_principal(principal)}


def _failure_redirect() -> RedirectResponse:
    return RedirectResponse("/auth/failure")


def _set_session_cookie(
    response: RedirectResponse, settings: Settings, token: str
) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.jwt_expires_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
