from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .. import constants


class SessionConfig(BaseModel):
    """Connection target and registration identity for one duplex session.

    Attributes:
        server: Hostname of the IRC server.
        port: TCP port of the IRC server.
        nick: Nickname used for both the USER and NICK registration lines.
        realname: Free text sent as the trailing USER parameter.
        read_timeout: Seconds to wait for inbound data; None blocks forever.
    """

    server: str = Field(default_factory=lambda: constants.IRC_SERVER, min_length=1)
    port: int = Field(default_factory=lambda: constants.IRC_PORT, ge=1, le=65535)
    nick: str = Field(default_factory=lambda: constants.IRC_NICK, min_length=1)
    realname: str = Field(default_factory=lambda: constants.IRC_REALNAME)
    read_timeout: float | None = None

    @field_validator("server", mode="before")
    @classmethod
    def validate_server(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        """A nick travels as a middle parameter: no spaces, no leading ':'."""
        v = v.strip()
        if not v:
            raise ValueError("nick must not be empty")
        if any(ch in v for ch in " \r\n\x00"):
            raise ValueError("nick must not contain spaces or line breaks")
        if v.startswith(":"):
            raise ValueError("nick must not start with ':'")
        return v

    @field_validator("realname")
    @classmethod
    def validate_realname(cls, v: str) -> str:
        if "\r" in v or "\n" in v:
            raise ValueError("realname must not contain line breaks")
        return v

    @field_validator("read_timeout", mode="before")
    @classmethod
    def validate_read_timeout(cls, v: Any) -> Any:
        # 0 and negative values mean "no timeout", matching IRC_READ_TIMEOUT
        if v is None:
            return None
        if isinstance(v, int | float) and v <= 0:
            return None
        return v

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Build a config from the environment-derived constants."""
        return cls(
            server=constants.IRC_SERVER,
            port=constants.IRC_PORT,
            nick=constants.IRC_NICK,
            realname=constants.IRC_REALNAME,
            read_timeout=constants.IRC_READ_TIMEOUT,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionConfig:
        """Create SessionConfig from a dictionary, ignoring None values.

        Args:
            data: Dictionary containing session configuration data.

        Returns:
            SessionConfig instance.
        """
        return cls.model_validate({k: v for k, v in data.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def user_line(self) -> str:
        """USER registration line (without terminator)."""
        return f"USER {self.nick} 0 * :{self.realname}"

    def nick_line(self) -> str:
        """NICK registration line (without terminator)."""
        return f"NICK {self.nick}"
