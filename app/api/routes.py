"""
FastAPI routes for the Threads OAuth callback service.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.dependencies import get_app_settings, get_threads_callback_service
from app.services import CallbackResult

router = APIRouter()

_NO_STORE = {"Cache-Control": "no-store"}


def render_result(result: CallbackResult) -> JSONResponse:
    return JSONResponse(
        status_code=int(result.status_code),
        content=result.body,
        headers=_NO_STORE,
    )


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(
    settings: Annotated[Any, Depends(get_app_settings)],
) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/threads/callback")
async def handle_threads_oauth_callback(
    service: Annotated[Any, Depends(get_threads_callback_service)],
    code: list[str] | None = Query(
        default=None,
        description="Authorization code appended by Threads to the redirect URI.",
    ),
) -> JSONResponse:
    """Exchange the authorization code and report which Threads user connected."""
    # A repeated code is ambiguous and is rejected like a missing one.
    single_code = code[0] if code and len(code) == 1 else None
    result = await service.handle_callback(single_code)
    return render_result(result)


__all__ = ["render_result", "router"]
