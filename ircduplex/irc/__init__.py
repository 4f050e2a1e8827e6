"""IRC subsystem package.

Contains the character source, incremental lexer, message assembler, local
line sources and the duplex session that ties them to one connection.
"""

from .assembler import MessageAssembler  # noqa: F401
from .char_source import CharSource  # noqa: F401
from .lexer import CharClass, MessageLexer, Scan, classify, step, tokenize, transition  # noqa: F401
from .line_source import IterableLineSource, LineSource, StdinLineSource  # noqa: F401
from .models import NOOP_TOKEN, Message, ParserState, Token  # noqa: F401
from .session import DuplexSession  # noqa: F401

__all__ = [
    "CharClass",
    "CharSource",
    "DuplexSession",
    "IterableLineSource",
    "LineSource",
    "Message",
    "MessageAssembler",
    "MessageLexer",
    "NOOP_TOKEN",
    "ParserState",
    "Scan",
    "StdinLineSource",
    "Token",
    "classify",
    "step",
    "tokenize",
    "transition",
]
