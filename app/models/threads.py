"""
Typed intermediate results of the Threads OAuth callback pipeline.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return str(value)
    return None


class TokenExchangeResult(BaseModel):
    """
    Outcome of exchanging an authorization code for an access token.

    Only ``access_token`` is required. The other fields are informational, so
    a malformed value is dropped instead of failing a token that was issued.
    """

    access_token: str = Field(..., repr=False)
    user_id: Optional[str] = Field(
        None, description="Threads user id, when the token endpoint includes it."
    )
    token_type: Optional[str] = None
    expires_in: Optional[int] = None

    @field_validator("user_id", "token_type", mode="before")
    @classmethod
    def _lenient_str(cls, value: Any) -> Optional[str]:
        return _optional_str(value)

    @field_validator("expires_in", mode="before")
    @classmethod
    def _lenient_int(cls, value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class ThreadsUserProfile(BaseModel):
    """The subset of the Threads profile returned to callers."""

    id: str
    username: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("username", mode="before")
    @classmethod
    def _lenient_username(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ProfileFetchResult(BaseModel):
    """Outcome of fetching ``/me`` with a freshly issued access token."""

    profile: ThreadsUserProfile


__all__ = ["ProfileFetchResult", "ThreadsUserProfile", "TokenExchangeResult"]
