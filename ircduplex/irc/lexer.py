"""Incremental IRC line lexer.

Message format (RFC 2812, simplified):

    message  =  [ ":" prefix SPACE ] command [ SPACE params ] [ SPACE ":" body ] CR? LF
    command  =  1*letter / 3digit
    params   =  middle *( SPACE middle )

The lexer is driven one character at a time by ``step``, a pure function of
the current ``Scan`` and the next character. ``:`` is disambiguated purely
by state: at line start it opens a prefix, after a command or parameter it
opens the trailing body. Nothing is buffered beyond the field being read.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum, auto
from typing import NamedTuple, Protocol

from .models import NOOP_TOKEN, ParserState, Token

START = ParserState.START
PREFIX = ParserState.PREFIX
COMMAND = ParserState.COMMAND
PARAMS = ParserState.PARAMS
BODY = ParserState.BODY


class CharClass(Enum):
    COLON = auto()
    ALPHA = auto()
    DIGIT = auto()
    SPACE = auto()
    CR = auto()
    LF = auto()
    OTHER = auto()


_SPECIAL = {
    ":": CharClass.COLON,
    " ": CharClass.SPACE,
    "\r": CharClass.CR,
    "\n": CharClass.LF,
}


def classify(ch: str) -> CharClass:
    special = _SPECIAL.get(ch)
    if special is not None:
        return special
    if ch.isascii():
        if ch.isalpha():
            return CharClass.ALPHA
        if ch.isdigit():
            return CharClass.DIGIT
    return CharClass.OTHER


_ALNUM = (CharClass.ALPHA, CharClass.DIGIT)

# (state, class of first character) -> field opened
_OPENERS: dict[tuple[ParserState, CharClass], ParserState] = {
    (START, CharClass.COLON): PREFIX,
    (BODY, CharClass.COLON): PREFIX,
    (COMMAND, CharClass.COLON): BODY,
    (PARAMS, CharClass.COLON): BODY,
    **{(state, cls): COMMAND for state in (START, PREFIX, BODY) for cls in _ALNUM},
    **{
        (state, cls): PARAMS
        for state in (COMMAND, PARAMS)
        for cls in (*_ALNUM, CharClass.OTHER)
    },
}

# Characters consumed between tokens without emitting anything
_SKIPPED: frozenset[tuple[ParserState, CharClass]] = frozenset(
    {(state, CharClass.CR) for state in ParserState}
    | {(state, CharClass.SPACE) for state in (PREFIX, COMMAND, PARAMS)}
    | {(START, CharClass.LF), (BODY, CharClass.LF)}
)

# Line ended before a trailing body was seen
_LINE_END: frozenset[tuple[ParserState, CharClass]] = frozenset(
    (state, CharClass.LF) for state in (PREFIX, COMMAND, PARAMS)
)

NUMERIC_COMMAND_LENGTH = 3


def transition(state: ParserState, char_class: CharClass) -> ParserState | None:
    """Field opened by a character of ``char_class`` in ``state``.

    None means the character is unexpected here (or is handled as a skip or
    line end by ``step``).
    """
    return _OPENERS.get((state, char_class))


class Scan(NamedTuple):
    """Immutable lexer snapshot: line position, open field, text so far."""

    state: ParserState = START
    field: ParserState | None = None
    text: str = ""


def step(scan: Scan, ch: str) -> tuple[Scan, Token | None]:
    """Consume one character; return the next snapshot and any finished token."""
    char_class = classify(ch)
    if scan.field is None:
        return _open(scan.state, ch, char_class)
    return _extend(scan, ch, char_class)


def _open(
    state: ParserState, ch: str, char_class: CharClass
) -> tuple[Scan, Token | None]:
    key = (state, char_class)
    if key in _SKIPPED:
        return Scan(state), None
    if key in _LINE_END:
        return Scan(START), NOOP_TOKEN
    field = transition(state, char_class)
    if field is None:
        # Forgiving: resynchronize at line start instead of failing
        return Scan(START), NOOP_TOKEN
    # Prefix and body markers are not part of the field text
    text = "" if field in (PREFIX, BODY) else ch
    return Scan(state, field, text), None


def _is_numeric(text: str) -> bool:
    return bool(text) and classify(text[0]) is CharClass.DIGIT


def _extend(scan: Scan, ch: str, char_class: CharClass) -> tuple[Scan, Token | None]:
    field, text = scan.field, scan.text
    assert field is not None
    if char_class is CharClass.CR:
        return scan, None
    if char_class is CharClass.LF:
        return Scan(BODY if field is BODY else START), Token(field, text)
    if field is BODY:
        return scan._replace(text=text + ch), None
    if field is COMMAND and _is_numeric(text):
        # The character after the third digit is the (consumed) delimiter
        if len(text) >= NUMERIC_COMMAND_LENGTH or char_class is CharClass.SPACE:
            return Scan(COMMAND), Token(COMMAND, text)
        return scan._replace(text=text + ch), None
    if char_class is CharClass.SPACE:
        return Scan(field), Token(field, text)
    return scan._replace(text=text + ch), None


def tokenize(chars: Iterable[str], scan: Scan | None = None) -> Iterator[Token]:
    """Run ``step`` over an in-memory character sequence.

    A field still open when the characters run out is dropped.
    """
    scan = scan or Scan()
    for ch in chars:
        scan, token = step(scan, ch)
        if token is not None:
            yield token


class CharReader(Protocol):
    async def read(self) -> str | None: ...


class MessageLexer:
    """Pulls characters from a char source and emits one token per call."""

    def __init__(self, source: CharReader) -> None:
        self._source = source
        self._scan = Scan()

    @property
    def state(self) -> ParserState:
        return self._scan.state

    async def next_token(self) -> Token | None:
        """Return the next token, or None at end-of-stream.

        Transport failures from the source propagate unchanged. A field cut
        short by end-of-stream is discarded.
        """
        while True:
            ch = await self._source.read()
            if ch is None:
                self._scan = Scan(self._scan.state)
                return None
            self._scan, token = step(self._scan, ch)
            if token is not None:
                return token

    def __aiter__(self) -> MessageLexer:
        return self

    async def __anext__(self) -> Token:
        token = await self.next_token()
        if token is None:
            raise StopAsyncIteration
        return token
