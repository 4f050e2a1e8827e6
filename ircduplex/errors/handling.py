from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    InternalError,
    NetworkError,
    SessionStateError,
)

TRANSPORT_ERRORS = (OSError, ConnectionError, TimeoutError)


def log_error(message: str, error: Exception, context: dict = None) -> None:
    """Logs an error message with the associated exception details.

    This function formats and logs an error message along with the string
    representation of the exception using structured logging for better
    error tracking and aggregation.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.

    Returns:
        None
    """
    error_type = "unknown"
    if isinstance(error, NetworkError | OSError | ConnectionError | TimeoutError):
        error_type = "network"
    elif isinstance(error, UnicodeError):
        error_type = "encoding"
    elif isinstance(error, ConfigurationError):
        error_type = "config"
    elif isinstance(error, SessionStateError):
        error_type = "session"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


async def guard_transport[T](operation: Callable[[], Awaitable[T]], context: str) -> T:
    """Run a connection I/O operation and normalize its failures.

    Raw transport exceptions are logged with structured context and re-raised
    as NetworkError so both session loops see a single error category.
    Internal errors pass through untouched.

    Args:
        operation: The async I/O operation to execute.
        context: Descriptive context for the operation (e.g., "inbound read").

    Returns:
        The result of the operation if successful.

    Raises:
        NetworkError: If the operation fails at the transport level.
    """
    try:
        return await operation()
    except InternalError:
        raise
    except TRANSPORT_ERRORS as e:
        error_context = {"operation": context, "timestamp": time.time()}
        if isinstance(e, OSError) and e.errno is not None:
            error_context["errno"] = e.errno
        log_error(f"Transport operation failed in {context}", e, context=error_context)
        raise NetworkError(
            f"Connection failure in {context}. The session loop using this half of the connection has ended. Error: {str(e) or type(e).__name__}",
            data=error_context,
        ) from e
