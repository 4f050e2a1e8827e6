"""Configuration package exports.

Session settings come from environment-backed constants; command-line
overrides are layered on top by ``load_session_config``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .. import constants
from ..errors.internal import ConfigurationError
from .model import SessionConfig


def load_session_config(overrides: Mapping[str, Any] | None = None) -> SessionConfig:
    """Merge non-None overrides over the environment defaults.

    Raises:
        ConfigurationError: If the merged values fail validation.
    """
    data: dict[str, Any] = {
        "server": constants.IRC_SERVER,
        "port": constants.IRC_PORT,
        "nick": constants.IRC_NICK,
        "realname": constants.IRC_REALNAME,
        "read_timeout": constants.IRC_READ_TIMEOUT,
    }
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    try:
        return SessionConfig.from_dict(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ConfigurationError(
            f"Invalid session configuration ({', '.join(fields) or 'unknown field'})",
            data={"errors": e.errors()},
        ) from e


__all__ = ["SessionConfig", "load_session_config"]
