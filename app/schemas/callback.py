"""Response bodies for the Threads OAuth callback."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

ACCESS_TOKEN_NOTE = (
    "access_token is NOT returned to the client; it is discarded once the "
    "profile has been fetched."
)


class ThreadsUser(BaseModel):
    """Public view of the authenticated Threads user."""

    id: str
    username: Optional[str] = None


class CallbackSuccess(BaseModel):
    """Body returned once the code exchange and profile lookup succeed."""

    ok: Literal[True] = True
    threads_user: ThreadsUser
    note: str = Field(ACCESS_TOKEN_NOTE)


class CallbackFailure(BaseModel):
    """Body returned when the callback cannot be completed."""

    ok: Literal[False] = False
    step: Optional[str] = Field(
        None, description="Pipeline stage that failed, for upstream failures."
    )
    error: Any = Field(..., description="Machine-readable error or provider error detail.")

    def to_body(self) -> dict[str, Any]:
        body = self.model_dump()
        if self.step is None:
            body.pop("step")
        return body


__all__ = ["ACCESS_TOKEN_NOTE", "CallbackFailure", "CallbackSuccess", "ThreadsUser"]
