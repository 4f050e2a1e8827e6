"""Duplex IRC session: one connection, an inbound decoder and an outbound writer.

The connection is held as two independent halves. The inbound half (a byte
reader) is used only by the ``messages()`` iterator; the outbound half (a
stream writer) only by the outbound task, which sends the registration
handshake and then forwards local input lines verbatim. Neither path waits
for the other, and they share no state besides the connection itself.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import suppress
from typing import Protocol

from ..config.model import SessionConfig
from ..constants import IRC_CONNECT_TIMEOUT, IRC_ENCODING, IRC_LINE_TERMINATOR
from ..errors.handling import guard_transport, log_error
from ..errors.internal import NetworkError, SessionStateError
from ..logs.logger import logger
from .assembler import MessageAssembler
from .char_source import ByteReader, CharSource
from .lexer import MessageLexer
from .line_source import LineSource
from .models import Message


class ByteWriter(Protocol):
    def write(self, data: bytes) -> None: ...
    async def drain(self) -> None: ...


class DuplexSession:  # pylint: disable=too-many-instance-attributes
    def __init__(
        self,
        reader: ByteReader,
        writer: ByteWriter,
        line_source: LineSource,
        config: SessionConfig,
    ) -> None:
        self.config = config
        self._writer = writer
        self._line_source = line_source
        self.char_source = CharSource(reader, read_timeout=config.read_timeout)
        self.lexer = MessageLexer(self.char_source)
        self.assembler = MessageAssembler(self.lexer)
        self._outbound: asyncio.Task[None] | None = None
        self._inbound_claimed = False
        self._closed = False
        self.lines_forwarded = 0

    @classmethod
    async def open(
        cls,
        config: SessionConfig,
        line_source: LineSource,
        *,
        connect_timeout: float = IRC_CONNECT_TIMEOUT,
    ) -> DuplexSession:
        """Connect to ``config.server`` and wrap the connection halves.

        Raises:
            NetworkError: If the connection cannot be established in time.
        """
        log_kw = {"nick": config.nick, "server": config.server, "port": config.port}
        logger.log_event("connection", "connect_start", **log_kw)
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(config.server, config.port),
                timeout=connect_timeout,
            )
        except TimeoutError as e:
            logger.log_event(
                "connection",
                "connect_timeout",
                level=logging.ERROR,
                timeout=connect_timeout,
                **log_kw,
            )
            raise NetworkError(
                f"Timed out connecting to {config.server}:{config.port}",
                data={"timeout": connect_timeout},
            ) from e
        except OSError as e:
            logger.log_event(
                "connection",
                "connect_failed",
                level=logging.ERROR,
                error=str(e),
                **log_kw,
            )
            raise NetworkError(
                f"Could not connect to {config.server}:{config.port}: {e}"
            ) from e
        logger.log_event("connection", "connected", **log_kw)
        return cls(reader, writer, line_source, config)

    # ------------------------------------------------------------------ #
    #  Outbound path                                                       #
    # ------------------------------------------------------------------ #

    def _log(self, action: str, level: int = logging.INFO, **kwargs: object) -> None:
        logger.log_event(
            "session",
            action,
            level=level,
            nick=self.config.nick,
            server=self.config.server,
            **kwargs,
        )

    async def _write(self, text: str) -> None:
        async def _do() -> None:
            self._writer.write(text.encode(IRC_ENCODING))
            await self._writer.drain()

        await guard_transport(_do, "outbound write")

    async def send_line(self, line: str) -> None:
        """Write one protocol line, appending the wire terminator."""
        await self._write(f"{line}{IRC_LINE_TERMINATOR}")

    async def register(self) -> None:
        """Send the USER and NICK registration lines."""
        await self.send_line(self.config.user_line())
        await self.send_line(self.config.nick_line())
        self._log("registration_sent")

    async def forward_input(self) -> int:
        """Copy local input lines to the connection until input or writing ends.

        Returns the number of lines forwarded. Failures are reported and end
        this loop only; the inbound path is unaffected.
        """
        self._log("outbound_start", level=logging.DEBUG)
        while True:
            try:
                line = await self._line_source.read_line()
            except (OSError, ValueError) as e:
                # ValueError: reading a closed stream
                log_error("Local input read failed", e, context={"forwarded": self.lines_forwarded})
                self._log("outbound_read_failed", level=logging.WARNING, error=str(e))
                return self.lines_forwarded
            if line is None:
                self._log("outbound_end_of_input", lines=self.lines_forwarded)
                return self.lines_forwarded
            try:
                await self._write(line)
            except UnicodeEncodeError as e:
                log_error("Local input line cannot be encoded", e, context={"forwarded": self.lines_forwarded})
                self._log("outbound_write_failed", level=logging.WARNING, error=str(e))
                return self.lines_forwarded
            except NetworkError as e:
                self._log("outbound_write_failed", level=logging.WARNING, error=str(e))
                return self.lines_forwarded
            self.lines_forwarded += 1

    async def _run_outbound(self) -> None:
        try:
            await self.register()
        except NetworkError as e:
            self._log("outbound_write_failed", level=logging.WARNING, error=str(e))
            return
        await self.forward_input()

    def start(self) -> asyncio.Task[None]:
        """Spawn the outbound task (registration, then forwarding)."""
        if self._outbound is not None:
            raise SessionStateError("Outbound path already started")
        if self._closed:
            raise SessionStateError("Session is closed")
        self._outbound = asyncio.create_task(
            self._run_outbound(), name=f"irc-outbound-{self.config.nick}"
        )
        return self._outbound

    @property
    def outbound_task(self) -> asyncio.Task[None] | None:
        return self._outbound

    # ------------------------------------------------------------------ #
    #  Inbound path                                                        #
    # ------------------------------------------------------------------ #

    def messages(self) -> AsyncIterator[Message]:
        """Decoded inbound messages, in arrival order.

        Starts the outbound task if it is not running yet. The sequence ends
        at end-of-stream; a transport failure raises ``NetworkError``. It can
        be consumed once per session.
        """
        if self._inbound_claimed:
            raise SessionStateError("Inbound messages already consumed; open a new session")
        self._inbound_claimed = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Message]:
        if self._outbound is None:
            self.start()
        self._log("inbound_start", level=logging.DEBUG)
        count = 0
        try:
            async for message in self.assembler:
                count += 1
                self._log(
                    "message",
                    level=logging.DEBUG,
                    prefix=message.prefix,
                    command=message.command,
                    params=message.params,
                )
                yield message
        except NetworkError as e:
            self._log("inbound_error", level=logging.ERROR, error=str(e), messages=count)
            raise
        self._log("inbound_end", messages=count)

    # ------------------------------------------------------------------ #
    #  Shutdown                                                            #
    # ------------------------------------------------------------------ #

    async def close(self) -> None:
        """Cancel the outbound task and close the write half. Idempotent."""
        if self._closed:
            return
        self._closed = True
        task = self._outbound
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
            self._log("outbound_cancelled", level=logging.DEBUG)
        close = getattr(self._writer, "close", None)
        if close is not None:
            try:
                close()
                wait_closed = getattr(self._writer, "wait_closed", None)
                if wait_closed is not None:
                    await wait_closed()
            except (OSError, ConnectionError) as e:
                log_error("Error closing connection", e)
        self._log("closed", level=logging.DEBUG)

    async def __aenter__(self) -> DuplexSession:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
