"""Firebase ID token verification with google-auth.

Verifies signature, audience (project id) and expiry of tokens returned by the
identity service. Certificate fetches are blocking, so they run in a thread.
"""

from __future__ import annotations

import asyncio
from typing import Any

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from movie_watchlist.domain.enums import AuthErrorReason
from movie_watchlist.domain.exceptions import AuthError


class FirebaseTokenVerifier:
    """Verify Firebase ID tokens for one project."""

    def __init__(self, project_id: str) -> None:
        self._project_id = project_id
        self._request = google_requests.Request()

    def _verify(self, token: str) -> dict[str, Any]:
        return google_id_token.verify_firebase_token(
            token, self._request, audience=self._project_id
        )

    async def verify(self, token: str) -> dict[str, Any]:
        """Return the token's claims. Raises AuthError if it cannot be verified."""
        try:
            claims = await asyncio.to_thread(self._verify, token)
        except (ValueError, google_exceptions.GoogleAuthError) as exc:
            raise AuthError(
                "Your sign-in could not be verified. Please try again.",
                AuthErrorReason.INVALID_TOKEN,
            ) from exc
        if not claims or not claims.get("sub"):
            raise AuthError(
                "Your sign-in could not be verified. Please try again.",
                AuthErrorReason.INVALID_TOKEN,
            )
        return claims
