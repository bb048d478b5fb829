"""Expose constructed client wrappers."""

from .threads_auth import (
    ThreadsOAuthClient,
    ThreadsProfileFetchError,
    ThreadsTokenExchangeError,
    ThreadsUpstreamError,
)

__all__ = [
    "ThreadsOAuthClient",
    "ThreadsProfileFetchError",
    "ThreadsTokenExchangeError",
    "ThreadsUpstreamError",
]
