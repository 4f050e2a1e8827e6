"""Folds lexer tokens into complete ``Message`` records."""

from __future__ import annotations

from .lexer import MessageLexer
from .models import Message, ParserState, Token

# Kinds allowed to follow the previous token of the same line
_FOLLOWERS: dict[ParserState | None, frozenset[ParserState]] = {
    None: frozenset({ParserState.PREFIX, ParserState.COMMAND}),
    ParserState.PREFIX: frozenset({ParserState.COMMAND}),
    ParserState.COMMAND: frozenset({ParserState.PARAMS, ParserState.BODY}),
    ParserState.PARAMS: frozenset({ParserState.PARAMS, ParserState.BODY}),
    ParserState.BODY: frozenset(),
}


def _apply(message: Message, token: Token) -> None:
    if token.kind is ParserState.PREFIX:
        message.prefix = token.text
    elif token.kind is ParserState.COMMAND:
        message.command = token.text
    elif token.kind is ParserState.PARAMS:
        message.params = f"{message.params} {token.text}" if message.params else token.text
    elif token.kind is ParserState.BODY:
        message.body = token.text


class MessageAssembler:
    """Builds one ``Message`` per protocol line.

    A message is returned once its trailing body arrives or its line ends
    without one. A token that cannot follow the previous one (for example a
    second prefix) closes the current message and is kept to open the next.
    """

    def __init__(self, lexer: MessageLexer) -> None:
        self._lexer = lexer
        self._carry: Token | None = None

    async def next_message(self) -> Message | None:
        """Return the next complete message, or None at end-of-stream.

        An in-progress message is discarded when the stream ends.
        """
        message = Message()
        last: ParserState | None = None
        while True:
            token = self._carry or await self._lexer.next_token()
            self._carry = None
            if token is None:
                return None
            if token.is_noop:
                if message.is_empty():
                    continue
                return message
            if last is not None and token.kind not in _FOLLOWERS[last]:
                self._carry = token
                return message
            _apply(message, token)
            last = token.kind
            if token.kind is ParserState.BODY or self._lexer.state is ParserState.START:
                return message

    def __aiter__(self) -> MessageAssembler:
        return self

    async def __anext__(self) -> Message:
        message = await self.next_message()
        if message is None:
            raise StopAsyncIteration
        return message
