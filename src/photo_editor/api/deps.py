"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from photo_editor.domain.users import Principal  # noqa: TC001

if TYPE_CHECKING:
    from photo_editor.containers import AppContainer

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> Principal:
    """Resolve the caller from a bearer token or the session cookie."""
    container = get_container(request)
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(container.settings.session_cookie_name)
    return container.auth_service.resolve_token(token)
