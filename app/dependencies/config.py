"""
FastAPI dependency utilities for injecting configuration.

Threads credentials are resolved through the client factories instead, so a
missing secret only fails the callback route and never the health check.
"""

from app.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings."""
    return get_settings()


__all__ = ["get_app_settings"]
