"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from app.clients import ThreadsOAuthClient
from app.core.config import get_threads_settings
from app.services import ThreadsCallbackService


@lru_cache()
def get_threads_oauth_client() -> ThreadsOAuthClient:
    """Create a singleton Threads OAuth client; raises ConfigurationError when unset."""
    return ThreadsOAuthClient(get_threads_settings())


def get_threads_callback_service() -> ThreadsCallbackService:
    """Build the callback service around the shared OAuth client."""
    return ThreadsCallbackService(get_threads_oauth_client())


__all__ = [
    "get_threads_callback_service",
    "get_threads_oauth_client",
]
