"""Public schema exports."""

from .callback import ACCESS_TOKEN_NOTE, CallbackFailure, CallbackSuccess, ThreadsUser

__all__ = [
    "ACCESS_TOKEN_NOTE",
    "CallbackFailure",
    "CallbackSuccess",
    "ThreadsUser",
]
