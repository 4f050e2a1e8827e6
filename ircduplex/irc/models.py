"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple


class ParserState(Enum):
    """Lexer position within a line; doubles as the token kind.

    START and BODY are line-start states (BODY right after a trailing part
    ended its line). A token of kind START is the no-op token.
    """

    START = auto()
    PREFIX = auto()
    COMMAND = auto()
    PARAMS = auto()
    BODY = auto()


class Token(NamedTuple):
    kind: ParserState
    text: str

    @property
    def is_noop(self) -> bool:
        return self.kind is ParserState.START


NOOP_TOKEN = Token(ParserState.START, "")


@dataclass
class Message:
    """One decoded protocol line.

    ``params`` holds the middle parameters joined by single spaces and
    ``body`` the trailing parameter without its leading ':'. Absent fields
    are empty strings.
    """

    prefix: str = ""
    command: str = ""
    params: str = ""
    body: str = ""

    def is_empty(self) -> bool:
        return not (self.prefix or self.command or self.params or self.body)

    @property
    def nick(self) -> str:
        """Nickname part of a ``nick!user@host`` prefix (or the whole prefix)."""
        return self.prefix.split("!", 1)[0].split("@", 1)[0]

    def to_line(self) -> str:
        """Re-serialize with single spaces; no line terminator."""
        parts: list[str] = []
        if self.prefix:
            parts.append(f":{self.prefix}")
        parts.append(self.command)
        if self.params:
            parts.append(self.params)
        if self.body:
            parts.append(f":{self.body}")
        return " ".join(parts)
