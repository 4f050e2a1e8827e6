"""Error hierarchy and handling helpers."""

from .handling import guard_transport, log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigurationError,
    InternalError,
    NetworkError,
    SessionStateError,
)

__all__ = [
    "InternalError",
    "NetworkError",
    "ConfigurationError",
    "SessionStateError",
    "guard_transport",
    "log_error",
]
