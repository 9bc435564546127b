"""Identity resolution: Google sign-in and signed access tokens."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

import jwt
from jwt import PyJWTError

from photo_editor.domain.errors import UnauthenticatedError
from photo_editor.domain.users import Principal

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_SCOPES = ("openid", "profile", "email")


class OAuthClient(Protocol):
    """Interface for an OAuth identity provider."""

    def authorization_url(self, state: str, scopes: tuple[str, ...]) -> str:
        """Return the provider URL the browser should be redirected to."""

    async def exchange_code(self, code: str) -> dict[str, object]:
        """Exchange an authorization code for provider tokens."""

    async def fetch_profile(self, access_token: str) -> dict[str, object]:
        """Return the user profile for a provider access token."""


@dataclass
class AuthService:
    """Turns provider callbacks and tokens into principals."""

    oauth_client: OAuthClient
    secret: str
    token_ttl: timedelta = timedelta(days=1)

    def begin_auth(
        self, state: str, scopes: tuple[str, ...] = DEFAULT_SCOPES
    ) -> str:
        """Return the redirect target that starts the sign-in flow."""
        return self.oauth_client.authorization_url(state, scopes)

    async def complete_auth(self, code: str) -> Principal:
        """Exchange the callback code and return the signed-in principal."""
        try:
            tokens = await self.oauth_client.exchange_code(code)
            access_token = tokens.get("access_token")
            if not access_token:
                raise UnauthenticatedError("Provider returned no access token")
            profile = await self.oauth_client.fetch_profile(str(access_token))
        except UnauthenticatedError:
            raise
        except Exception as exc:
            logger.exception("OAuth code exchange failed")
            raise UnauthenticatedError("Google OAuth failed") from exc
        return _principal_from_profile(profile)

    def issue_token(self, principal: Principal) -> str:
        """Sign an access token carrying the principal's claims."""
        now = datetime.now(tz=UTC)
        claims = {
            "sub": principal.id,
            "id": principal.id,
            "name": principal.name,
            "email": principal.email,
            "photo": principal.photo,
            "iat": now,
            "exp": now + self.token_ttl,
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def resolve_token(self, token: str | None) -> Principal:
        """Return the principal for a token or raise UnauthenticatedError."""
        if not token:
            raise UnauthenticatedError("No token provided")
        try:
            claims = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except PyJWTError as exc:
            raise UnauthenticatedError("Invalid token") from exc
        principal_id = claims.get("id") or claims.get("sub")
        if not principal_id:
            raise UnauthenticatedError("Invalid token")
        return Principal(
            id=str(principal_id),
            name=str(claims.get("name") or ""),
            email=str(claims.get("email") or ""),
            photo=str(claims.get("photo") or ""),
        )


def _principal_from_profile(profile: dict[str, object]) -> Principal:
    principal_id = profile.get("sub") or profile.get("id")
    if not principal_id:
        raise UnauthenticatedError("Provider profile has no user id")
    return Principal(
        id=str(principal_id),
        name=str(profile.get("name") or ""),
        email=str(profile.get("email") or ""),
        photo=str(profile.get("picture") or ""),
    )
