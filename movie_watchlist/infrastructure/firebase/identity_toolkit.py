"""Firebase Authentication REST gateway (implements IIdentityGateway).

Talks to the identitytoolkit (accounts:*) and securetoken endpoints with
httpx. Holds the signed-in user's tokens in memory only. Identity changes are
delivered to listeners with loop.call_soon, so they arrive in emission order
and never re-enter the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any

import httpx

from movie_watchlist.application.dtos.identity import FederatedCredential, Identity
from movie_watchlist.application.interfaces.gateways import IdentityListener
from movie_watchlist.core.constants import (
    FEDERATED_REQUEST_URI,
    ID_TOKEN_REFRESH_MARGIN_SECONDS,
    IDENTITY_TOOLKIT_BASE_URL,
    RECENT_SIGN_IN_WINDOW_SECONDS,
    SECURE_TOKEN_URL,
)
from movie_watchlist.domain.enums import AuthErrorReason, SignInProvider
from movie_watchlist.domain.exceptions import AuthError, ReauthRequiredError
from movie_watchlist.infrastructure.firebase._token_verifier import FirebaseTokenVerifier
from movie_watchlist.shared.utils.datetime import from_timestamp_utc, utc_now

logger = logging.getLogger(__name__)

# Identity service error code -> (reason, message shown to the user)
_ERROR_MESSAGES: dict[str, tuple[AuthErrorReason, str]] = {
    "EMAIL_NOT_FOUND": (AuthErrorReason.INVALID_CREDENTIALS, "Invalid email or password."),
    "INVALID_PASSWORD": (AuthErrorReason.INVALID_CREDENTIALS, "Invalid email or password."),
    "INVALID_LOGIN_CREDENTIALS": (AuthErrorReason.INVALID_CREDENTIALS, "Invalid email or password."),
    "INVALID_EMAIL": (AuthErrorReason.INVALID_CREDENTIALS, "That email address is not valid."),
    "MISSING_PASSWORD": (AuthErrorReason.INVALID_CREDENTIALS, "Please enter your password."),
    "EMAIL_EXISTS": (AuthErrorReason.EMAIL_IN_USE, "An account with this email already exists."),
    "WEAK_PASSWORD": (AuthErrorReason.WEAK_PASSWORD, "Password should be at least 6 characters."),
    "USER_DISABLED": (AuthErrorReason.USER_DISABLED, "This account has been disabled."),
    "TOO_MANY_ATTEMPTS_TRY_LATER": (
        AuthErrorReason.TOO_MANY_ATTEMPTS,
        "Too many attempts. Please try again later.",
    ),
    "INVALID_IDP_RESPONSE": (AuthErrorReason.INVALID_CREDENTIALS, "Google sign-in failed."),
    "INVALID_ID_TOKEN": (AuthErrorReason.INVALID_TOKEN, "Your session has expired. Please sign in again."),
    "TOKEN_EXPIRED": (AuthErrorReason.INVALID_TOKEN, "Your session has expired. Please sign in again."),
    "INVALID_REFRESH_TOKEN": (AuthErrorReason.INVALID_TOKEN, "Your session has expired. Please sign in again."),
    "USER_NOT_FOUND": (AuthErrorReason.INVALID_TOKEN, "This account no longer exists."),
}

_REAUTH_CODES = frozenset({"CREDENTIAL_TOO_OLD_LOGIN_AGAIN"})

# Reasons after which the stored session cannot be used any more.
_SESSION_ENDING_REASONS = frozenset({AuthErrorReason.INVALID_TOKEN, AuthErrorReason.USER_DISABLED})


def _error_code(payload: Any) -> str:
    """Extract the code from an identity service error body.

    Messages look like "WEAK_PASSWORD : Password should be at least 6 characters".
    """
    if not isinstance(payload, dict):
        return ""
    message = (payload.get("error") or {}).get("message") or ""
    return message.split(":", 1)[0].strip()


def _raise_for_error(status_code: int, payload: Any) -> None:
    code = _error_code(payload)
    if code in _REAUTH_CODES:
        raise ReauthRequiredError()
    reason, message = _ERROR_MESSAGES.get(
        code, (AuthErrorReason.UNKNOWN, "Something went wrong. Please try again.")
    )
    logger.info("Identity service rejected request: HTTP %s %s", status_code, code or "<no code>")
    raise AuthError(message, reason)


def _providers_from_lookup(user: dict[str, Any]) -> tuple[SignInProvider, ...]:
    ordered: list[SignInProvider] = []
    for info in user.get("providerUserInfo") or []:
        provider = SignInProvider.from_provider_id(info.get("providerId"))
        if provider not in ordered:
            ordered.append(provider)
    return tuple(ordered)


@dataclass
class _SignedInUser:
    identity: Identity
    id_token: str
    refresh_token: str
    expires_at: datetime


class FirebaseIdentityGateway:
    """Identity gateway over the Firebase Authentication REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        token_verifier: FirebaseTokenVerifier | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None
        self._verifier = token_verifier
        self._clock = clock
        self._user: _SignedInUser | None = None
        self._listeners: list[IdentityListener] = []
        self._refresh_lock = asyncio.Lock()

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    @property
    def current_identity(self) -> Identity | None:
        return self._user.identity if self._user else None

    # ---- Listeners ----

    def on_identity_state_change(self, callback: IdentityListener) -> Callable[[], None]:
        """Register callback; it receives the current identity first, then every change."""
        loop = asyncio.get_running_loop()
        self._listeners.append(callback)
        loop.call_soon(self._deliver, callback, self.current_identity)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _deliver(self, callback: IdentityListener, identity: Identity | None) -> None:
        if callback in self._listeners:
            callback(identity)

    def _emit(self, identity: Identity | None) -> None:
        loop = asyncio.get_running_loop()
        for callback in list(self._listeners):
            loop.call_soon(self._deliver, callback, identity)

    # ---- HTTP ----

    async def _post(self, url: str, *, json: dict | None = None, data: dict | None = None) -> dict:
        try:
            resp = await self._http.post(url, params={"key": self._api_key}, json=json, data=data)
        except httpx.HTTPError as exc:
            logger.warning("Identity service unreachable: %s", exc)
            raise AuthError(
                "Could not reach the sign-in service. Check your connection.",
                AuthErrorReason.UNAVAILABLE,
            ) from exc
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if resp.status_code != 200:
            _raise_for_error(resp.status_code, payload)
        return payload if isinstance(payload, dict) else {}

    async def _accounts(self, method: str, body: dict[str, Any]) -> dict:
        return await self._post(f"{IDENTITY_TOOLKIT_BASE_URL}/accounts:{method}", json=body)

    async def _build_identity(self, payload: dict[str, Any]) -> tuple[Identity, str]:
        """Identity for a sign-in response (verifies the token, looks up providers)."""
        id_token = payload.get("idToken", "")
        uid = payload.get("localId", "")
        signed_in_at = self._clock()
        if self._verifier is not None:
            claims = await self._verifier.verify(id_token)
            if claims.get("sub") != uid:
                raise AuthError("Your sign-in could not be verified.", AuthErrorReason.INVALID_TOKEN)
            if claims.get("auth_time"):
                signed_in_at = from_timestamp_utc(float(claims["auth_time"]))
        lookup = await self._accounts("lookup", {"idToken": id_token})
        users = lookup.get("users") or [{}]
        user = users[0]
        identity = Identity(
            uid=uid,
            email=user.get("email") or payload.get("email") or None,
            display_name=user.get("displayName") or payload.get("displayName") or None,
            providers=_providers_from_lookup(user),
            signed_in_at=signed_in_at,
        )
        return identity, id_token

    def _store_tokens(self, identity: Identity, id_token: str, payload: dict[str, Any]) -> None:
        expires_in = int(payload.get("expiresIn") or 3600)
        self._user = _SignedInUser(
            identity=identity,
            id_token=id_token,
            refresh_token=payload.get("refreshToken", ""),
            expires_at=self._clock() + timedelta(seconds=expires_in),
        )

    async def _sign_in(self, method: str, body: dict[str, Any]) -> Identity:
        payload = await self._accounts(method, {**body, "returnSecureToken": True})
        identity, id_token = await self._build_identity(payload)
        self._store_tokens(identity, id_token, payload)
        logger.info("Signed in uid=%s via %s", identity.uid, method)
        self._emit(identity)
        return identity

    async def _reauthenticate(self, method: str, body: dict[str, Any]) -> None:
        if self._user is None:
            raise AuthError("You are not signed in.", AuthErrorReason.NOT_SIGNED_IN)
        current = self._user.identity
        payload = await self._accounts(method, {**body, "returnSecureToken": True})
        if payload.get("localId") != current.uid:
            raise AuthError(
                "Those credentials belong to a different account.",
                AuthErrorReason.USER_MISMATCH,
            )
        identity, id_token = await self._build_identity(payload)
        # Same account: no identity-state notification.
        self._store_tokens(
            replace(current, signed_in_at=identity.signed_in_at), id_token, payload
        )
        logger.info("Reauthenticated uid=%s via %s", current.uid, method)

    # ---- Operations ----

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        return await self._sign_in("signInWithPassword", {"email": email, "password": password})

    async def sign_up_with_password(self, email: str, password: str) -> Identity:
        return await self._sign_in("signUp", {"email": email, "password": password})

    async def sign_in_federated(self, credential: FederatedCredential) -> Identity:
        return await self._sign_in(
            "signInWithIdp",
            {
                "postBody": credential.post_body(),
                "requestUri": FEDERATED_REQUEST_URI,
                "returnIdpCredential": True,
            },
        )

    async def sign_out(self) -> None:
        if self._user is None:
            return
        logger.info("Signed out uid=%s", self._user.identity.uid)
        self._user = None
        self._emit(None)

    async def send_password_reset(self, email: str) -> None:
        await self._accounts("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})
        logger.info("Password reset email requested")

    async def delete_current_identity(self) -> None:
        """Delete the signed-in account (no-op when signed out)."""
        if self._user is None:
            return
        uid = self._user.identity.uid
        id_token = await self.get_id_token()
        await self._accounts("delete", {"idToken": id_token})
        self._user = None
        logger.info("Deleted account uid=%s", uid)
        self._emit(None)

    async def reauthenticate_with_password(self, password: str) -> None:
        if self._user is None or not self._user.identity.email:
            raise AuthError("This account has no email address.", AuthErrorReason.NOT_SIGNED_IN)
        await self._reauthenticate(
            "signInWithPassword",
            {"email": self._user.identity.email, "password": password},
        )

    async def reauthenticate_federated(self, credential: FederatedCredential) -> None:
        await self._reauthenticate(
            "signInWithIdp",
            {
                "postBody": credential.post_body(),
                "requestUri": FEDERATED_REQUEST_URI,
                "returnIdpCredential": True,
            },
        )

    def ensure_recent_sign_in(self) -> None:
        if self._user is None:
            raise AuthError("You are not signed in.", AuthErrorReason.NOT_SIGNED_IN)
        signed_in_at = self._user.identity.signed_in_at
        window = timedelta(seconds=RECENT_SIGN_IN_WINDOW_SECONDS)
        if signed_in_at is None or self._clock() - signed_in_at > window:
            raise ReauthRequiredError()

    async def get_id_token(self) -> str | None:
        """Return a valid ID token, refreshing it shortly before expiry."""
        if self._user is None:
            return None
        async with self._refresh_lock:
            user = self._user
            if user is None:
                return None
            margin = timedelta(seconds=ID_TOKEN_REFRESH_MARGIN_SECONDS)
            if self._clock() + margin < user.expires_at:
                return user.id_token
            try:
                payload = await self._post(
                    SECURE_TOKEN_URL,
                    data={"grant_type": "refresh_token", "refresh_token": user.refresh_token},
                )
            except AuthError as exc:
                if exc.reason in _SESSION_ENDING_REASONS:
                    logger.info("Session ended during token refresh: %s", exc.reason.value)
                    self._user = None
                    self._emit(None)
                raise
            user.id_token = payload.get("id_token", "")
            user.refresh_token = payload.get("refresh_token", user.refresh_token)
            user.expires_at = self._clock() + timedelta(seconds=int(payload.get("expires_in") or 3600))
            logger.debug("ID token refreshed for uid=%s", user.identity.uid)
            return user.id_token
