"""Local line-input collaborators for the outbound path."""

from __future__ import annotations

import asyncio
import sys
import threading
from collections.abc import Iterable
from contextlib import suppress
from typing import Protocol, TextIO


class LineSource(Protocol):
    async def read_line(self) -> str | None: ...


def _settle(future: asyncio.Future, line: str | None, error: BaseException | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(line)


class StdinLineSource:
    """Reads lines from a text stream (stdin by default) off the event loop.

    Each ``read_line`` blocks a daemon thread until a line is available, so
    the inbound decoder keeps running while the user types and a pending
    read never holds up interpreter shutdown. Lines are returned with their
    newline; ``None`` signals end-of-input.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdin

    async def read_line(self) -> str | None:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str | None] = loop.create_future()

        def _read() -> None:
            try:
                line, error = self._stream.readline(), None
            except (OSError, ValueError) as e:
                line, error = None, e
            # RuntimeError: loop already closed, nobody is waiting
            with suppress(RuntimeError):
                loop.call_soon_threadsafe(_settle, future, line, error)

        threading.Thread(target=_read, name="stdin-reader", daemon=True).start()
        line = await future
        return line or None


class IterableLineSource:
    """Serves a fixed sequence of lines, then end-of-input."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)

    async def read_line(self) -> str | None:
        # Yield to the loop so a long sequence cannot starve the inbound path
        await asyncio.sleep(0)
        return next(self._lines, None)
