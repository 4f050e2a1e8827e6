"""Centralized internal error hierarchy.

These exceptions provide semantic categories for session-level error handling.
Only raise these inside connection/session boundaries – never surface raw
OSError / asyncio timeouts to callers of the session; wrap them instead.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport read/write failures on the connection.
  ConfigurationError   – Invalid session configuration values.
  SessionStateError    – Session API used out of order (started twice, etc).

Malformed protocol input is never an error: the lexer degrades to empty
fields instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Covers resets, broken pipes and read timeouts on either half of the
    connection. The core never retries these; the affected loop ends.
    """


class ConfigurationError(InternalError):
    """Exception raised when session configuration fails validation."""


class SessionStateError(InternalError):
    """Exception raised when a session is driven in an unsupported order."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ConfigurationError",
    "SessionStateError",
]
