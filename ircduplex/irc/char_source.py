"""Lazily decoded character stream over the inbound half of a connection."""

from __future__ import annotations

import asyncio
import codecs
from typing import Protocol

from ..constants import IRC_ENCODING, IRC_READ_CHUNK_SIZE
from ..errors.handling import guard_transport
from ..errors.internal import NetworkError


class ByteReader(Protocol):
    async def read(self, n: int = -1) -> bytes: ...


class CharSource:
    """Produces one decoded character per ``read()``; ``None`` at end-of-stream.

    Bytes are pulled from the reader in chunks only when the decoded buffer
    runs dry, so a character becomes available as soon as its bytes arrive.
    Multi-byte sequences split across chunks are handled by an incremental
    decoder; undecodable bytes are dropped.
    """

    def __init__(
        self,
        reader: ByteReader,
        *,
        chunk_size: int = IRC_READ_CHUNK_SIZE,
        read_timeout: float | None = None,
        encoding: str = IRC_ENCODING,
    ) -> None:
        self._reader = reader
        self._chunk_size = chunk_size
        self._read_timeout = read_timeout
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="ignore")
        self._buffer = ""
        self._pos = 0
        self._eof = False

    @property
    def at_eof(self) -> bool:
        return self._eof and self._pos >= len(self._buffer)

    async def read(self) -> str | None:
        while self._pos >= len(self._buffer):
            if self._eof:
                return None
            await self._fill()
        ch = self._buffer[self._pos]
        self._pos += 1
        return ch

    async def _fill(self) -> None:
        data = await guard_transport(self._read_chunk, "inbound read")
        if not data:
            self._eof = True
            self._buffer = self._decoder.decode(b"", final=True)
        else:
            self._buffer = self._decoder.decode(data)
        self._pos = 0

    async def _read_chunk(self) -> bytes:
        if self._read_timeout is None:
            return await self._reader.read(self._chunk_size)
        try:
            return await asyncio.wait_for(
                self._reader.read(self._chunk_size), timeout=self._read_timeout
            )
        except TimeoutError as e:
            raise NetworkError(
                f"No inbound data within {self._read_timeout}s",
                data={"timeout": self._read_timeout},
            ) from e

    def __aiter__(self) -> CharSource:
        return self

    async def __anext__(self) -> str:
        ch = await self.read()
        if ch is None:
            raise StopAsyncIteration
        return ch
