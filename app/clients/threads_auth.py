"""
Threads OAuth utilities.

These helpers exchange an authorization code for an access token and look up
the user the token belongs to.
"""

from __future__ import annotations

from typing import Any

import httpx

from app.core.config import ThreadsSettings
from app.models.threads import (
    ProfileFetchResult,
    ThreadsUserProfile,
    TokenExchangeResult,
)


class ThreadsUpstreamError(Exception):
    """Raised when the Threads Graph API rejects a request."""

    step = "upstream_failed"

    def __init__(self, status_code: int, provider_error: Any) -> None:
        self.status_code = status_code
        self.provider_error = provider_error
        super().__init__(f"{self.step} (HTTP {status_code})")


class ThreadsTokenExchangeError(ThreadsUpstreamError):
    """Raised when the token endpoint does not issue an access token."""

    step = "token_exchange_failed"


class ThreadsProfileFetchError(ThreadsUpstreamError):
    """Raised when ``/me`` does not return a user id."""

    step = "me_failed"


def _provider_error(response: httpx.Response, payload: Any, missing_field: str) -> Any:
    """Narrow a provider body down to its ``error`` field."""
    if isinstance(payload, dict) and payload.get("error") is not None:
        return payload["error"]
    if response.is_success:
        return f"missing_{missing_field}"
    return f"http_{response.status_code}"


class ThreadsOAuthClient:
    """Exchange Threads authorization codes and fetch the authenticated profile."""

    TOKEN_PATH = "/oauth/access_token"
    PROFILE_FIELDS = ("id", "username")

    def __init__(
        self,
        settings: ThreadsSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def token_url(self) -> str:
        return f"{self._settings.graph_base_url}{self.TOKEN_PATH}"

    @property
    def profile_url(self) -> str:
        return f"{self._settings.graph_base_url}/{self._settings.api_version}/me"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._settings.http_timeout_seconds,
            transport=self._transport,
        )

    async def exchange_authorization_code(self, code: str) -> TokenExchangeResult:
        """
        Exchange an authorization code for a short-lived access token.

        The body is decoded as JSON whatever the status, since Threads reports
        failures as structured ``{"error": ...}`` payloads.
        """
        payload = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "grant_type": "authorization_code",
            "redirect_uri": self._settings.redirect_uri,
            "code": code,
        }

        async with self._client() as client:
            response = await client.post(self.token_url, data=payload)

        token_payload = response.json()
        access_token = (
            token_payload.get("access_token") if isinstance(token_payload, dict) else None
        )
        if not response.is_success or not access_token:
            raise ThreadsTokenExchangeError(
                response.status_code,
                _provider_error(response, token_payload, "access_token"),
            )

        return TokenExchangeResult(
            access_token=access_token,
            user_id=token_payload.get("user_id"),
            token_type=token_payload.get("token_type"),
            expires_in=token_payload.get("expires_in"),
        )

    async def fetch_profile(self, access_token: str) -> ProfileFetchResult:
        """Fetch the id and username of the user owning ``access_token``."""
        params = {
            "fields": ",".join(self.PROFILE_FIELDS),
            "access_token": access_token,
        }

        async with self._client() as client:
            response = await client.get(self.profile_url, params=params)

        profile_payload = response.json()
        user_id = profile_payload.get("id") if isinstance(profile_payload, dict) else None
        if not response.is_success or not user_id:
            raise ThreadsProfileFetchError(
                response.status_code,
                _provider_error(response, profile_payload, "id"),
            )

        profile = ThreadsUserProfile(id=user_id, username=profile_payload.get("username"))
        return ProfileFetchResult(profile=profile)


__all__ = [
    "ThreadsOAuthClient",
    "ThreadsProfileFetchError",
    "ThreadsTokenExchangeError",
    "ThreadsUpstreamError",
]
