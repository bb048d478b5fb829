"""
FastAPI application entrypoint for the Threads OAuth callback service.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes import render_result, router as api_router
from app.core.config import ConfigurationError, get_settings
from app.core.logging import configure_logging
from app.services import configuration_error_result


async def _configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    return render_result(configuration_error_result(exc))


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Threads OAuth Callback",
        version="0.1.0",
        description="Completes the Threads authorization-code flow and reports the connected user.",
    )
    app.include_router(api_router, prefix="/api")
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)
    return app


app = create_app()

__all__ = ["app", "create_app"]
