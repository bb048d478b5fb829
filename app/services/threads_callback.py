"""Service that completes the Threads OAuth callback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Protocol

from app.clients.threads_auth import (
    ThreadsProfileFetchError,
    ThreadsTokenExchangeError,
    ThreadsUpstreamError,
)
from app.core.config import ConfigurationError
from app.models.threads import ProfileFetchResult, TokenExchangeResult
from app.schemas import CallbackFailure, CallbackSuccess, ThreadsUser

logger = logging.getLogger(__name__)


class ThreadsOAuthBackend(Protocol):
    async def exchange_authorization_code(self, code: str) -> TokenExchangeResult: ...

    async def fetch_profile(self, access_token: str) -> ProfileFetchResult: ...


@dataclass(slots=True, frozen=True)
class CallbackResult:
    """HTTP status and JSON body produced for a callback request."""

    status_code: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == HTTPStatus.OK


def failure(status_code: int, error: Any, step: str | None = None) -> CallbackResult:
    return CallbackResult(
        status_code=status_code,
        body=CallbackFailure(step=step, error=error).to_body(),
    )


def configuration_error_result(exc: ConfigurationError) -> CallbackResult:
    """Render a configuration problem without exposing which values were set."""
    logger.error("Threads OAuth configuration is invalid: %s", ", ".join(exc.fields))
    return failure(HTTPStatus.INTERNAL_SERVER_ERROR, "configuration_error")


class ThreadsCallbackService:
    """
    Run the two-stage callback pipeline: code -> access token -> profile.

    Every outcome, including unexpected exceptions, is returned as a
    ``CallbackResult``. The access token never leaves this object.
    """

    def __init__(self, oauth_client: ThreadsOAuthBackend) -> None:
        self._oauth = oauth_client

    async def handle_callback(self, code: Any) -> CallbackResult:
        if not isinstance(code, str) or not code:
            return failure(HTTPStatus.BAD_REQUEST, "missing_code")

        try:
            token = await self._oauth.exchange_authorization_code(code)
            result = await self._oauth.fetch_profile(token.access_token)
        except ThreadsUpstreamError as exc:
            return self._upstream_failure(exc)
        except Exception:
            logger.exception("Unexpected failure while completing Threads OAuth callback")
            return failure(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_error")

        logger.info(
            "Threads OAuth callback completed",
            extra={"threads_user_id": result.profile.id},
        )
        success = CallbackSuccess(threads_user=ThreadsUser(**result.profile.model_dump()))
        return CallbackResult(status_code=HTTPStatus.OK, body=success.model_dump())

    @staticmethod
    def _upstream_failure(exc: ThreadsUpstreamError) -> CallbackResult:
        if isinstance(exc, ThreadsTokenExchangeError):
            message = "Threads token exchange failed"
        elif isinstance(exc, ThreadsProfileFetchError):
            message = "Threads profile lookup failed"
        else:  # pragma: no cover - only the two stages raise
            message = "Threads request failed"
        logger.warning(
            message,
            extra={
                "step": exc.step,
                "status_code": exc.status_code,
                "provider_error": exc.provider_error,
            },
        )
        return failure(HTTPStatus.BAD_REQUEST, exc.provider_error, step=exc.step)


__all__ = [
    "CallbackResult",
    "ThreadsCallbackService",
    "configuration_error_result",
    "failure",
]
