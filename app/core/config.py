"""
Application configuration models and helpers.

Centralizes settings management so both the FastAPI app and the serverless
callback function share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when required Threads configuration is missing or malformed."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(
            "Invalid or missing configuration: " + ", ".join(fields or ["<unknown>"])
        )


class ThreadsSettings(BaseSettings):
    """Credentials and endpoints for the Threads OAuth integration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    client_id: str = Field(..., min_length=1, validation_alias="THREADS_APP_ID")
    client_secret: str = Field(
        ..., min_length=1, validation_alias="THREADS_APP_SECRET"
    )
    redirect_uri: str = Field(
        ...,
        validation_alias="THREADS_REDIRECT_URI",
        description="Must match the redirect URI registered with the Threads app exactly.",
    )
    graph_base_url: str = Field(
        "https://graph.threads.net", validation_alias="THREADS_GRAPH_BASE_URL"
    )
    api_version: str = Field("v1.0", validation_alias="THREADS_API_VERSION")
    http_timeout_seconds: float = Field(
        10.0, gt=0, validation_alias="THREADS_HTTP_TIMEOUT"
    )

    @field_validator("redirect_uri", "graph_base_url")
    @classmethod
    def _require_http_url(cls, value: str, info: ValidationInfo) -> str:
        # Threads compares the redirect URI byte for byte, so only whitespace is trimmed.
        cleaned = value.strip()
        if not cleaned.startswith(("https://", "http://")):
            raise ValueError("must be an http(s) URL")
        if info.field_name == "graph_base_url":
            return cleaned.rstrip("/")
        return cleaned


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


def load_threads_settings(env_file: Optional[Path] = None) -> ThreadsSettings:
    """
    Build Threads settings from the environment, optionally reading ``env_file``
    instead of the default ``.env``. Process variables take precedence.

    Raises ``ConfigurationError`` listing the offending variables. Values are
    never included since they may hold secrets.
    """
    try:
        if env_file is not None:
            return ThreadsSettings(_env_file=env_file)  # type: ignore[call-arg]
        return ThreadsSettings()  # type: ignore[call-arg]
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(part) for part in error["loc"]) for error in exc.errors()}
        )
        raise ConfigurationError(fields) from exc


@lru_cache()
def get_threads_settings() -> ThreadsSettings:
    """Return cached Threads settings; failures are not cached."""
    return load_threads_settings()


__all__ = [
    "AppSettings",
    "ConfigurationError",
    "ThreadsSettings",
    "get_settings",
    "get_threads_settings",
    "load_threads_settings",
]
