"""Google OAuth 2.0 client."""

from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from photo_editor.services.auth import OAuthClient

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


@dataclass
class HttpxGoogleOAuthClient(OAuthClient):
    """HTTPX-backed Google OAuth client."""

    client_id: str
    client_secret: str
    redirect_uri: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, client_id: str, client_secret: str, redirect_uri: str
    ) -> "HttpxGoogleOAuthClient":
        """Create a Google client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, state: str, scopes: tuple[str, ...]) -> str:
        """Build the Google consent screen URL."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "state": state,
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> dict[str, object]:
        """Exchange an authorization code for tokens."""
        response = await self.http_client.post(
            GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def fetch_profile(self, access_token: str) -> dict[str, object]:
        """Fetch the OpenID userinfo document."""
        response = await self.http_client.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
