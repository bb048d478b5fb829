"""Service layer exports."""

from .threads_callback import (
    CallbackResult,
    ThreadsCallbackService,
    configuration_error_result,
)

__all__ = [
    "CallbackResult",
    "ThreadsCallbackService",
    "configuration_error_result",
]
