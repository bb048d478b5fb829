"""
AWS Lambda entrypoint for the Threads OAuth redirect.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs

from app.clients import ThreadsOAuthClient
from app.core.config import ConfigurationError, get_settings, get_threads_settings
from app.core.logging import configure_logging
from app.services import (
    CallbackResult,
    ThreadsCallbackService,
    configuration_error_result,
)

logger = logging.getLogger(__name__)

configure_logging(get_settings().log_level)


def build_service() -> ThreadsCallbackService:
    """Wire the callback service from environment configuration."""
    return ThreadsCallbackService(ThreadsOAuthClient(get_threads_settings()))


def _single(values: List[str]) -> Optional[str]:
    return values[0] if len(values) == 1 else None


def extract_code(event: Dict[str, Any]) -> Any:
    """
    Pull ``code`` from an API Gateway (v1 or v2) or function URL event.

    A code sent more than once yields ``None`` so the request is rejected as
    missing rather than redeeming one of the values.
    """
    multi_params = event.get("multiValueQueryStringParameters")
    if multi_params is not None:
        return _single(multi_params.get("code") or [])

    raw_query = event.get("rawQueryString")
    if raw_query is not None:
        return _single(parse_qs(raw_query, keep_blank_values=True).get("code", []))

    code = (event.get("queryStringParameters") or {}).get("code")
    if isinstance(code, str):
        # HTTP APIs and function URLs join repeated values with commas.
        return _single(code.split(","))
    return code


async def handle_event(
    event: Dict[str, Any], service: ThreadsCallbackService
) -> CallbackResult:
    return await service.handle_callback(extract_code(event))


def to_proxy_response(result: CallbackResult) -> Dict[str, Any]:
    return {
        "statusCode": int(result.status_code),
        "headers": {
            "Content-Type": "application/json",
            "Cache-Control": "no-store",
        },
        "body": json.dumps(result.body),
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    AWS Lambda handler invoked for each redirect from Threads.

    Threads settings are resolved on invocation rather than at import, so a
    missing secret yields a JSON 500 instead of an import failure.
    """
    try:
        service = build_service()
    except ConfigurationError as exc:
        return to_proxy_response(configuration_error_result(exc))

    result = asyncio.run(handle_event(event, service))
    logger.info("Threads callback finished", extra={"status_code": int(result.status_code)})
    return to_proxy_response(result)


__all__ = [
    "build_service",
    "extract_code",
    "handle_event",
    "lambda_handler",
    "to_proxy_response",
]
