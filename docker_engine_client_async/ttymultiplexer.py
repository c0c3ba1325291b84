#!/usr/bin/env python

"""
Demultiplexing of container attach streams.

Without a TTY, the daemon frames each write to stdout / stderr as:

    [stream type: 1 byte][padding: 3 bytes][payload length: 4 bytes, big endian][payload]

With a TTY, the stream is raw and undifferentiated; it is reported as stdout.

https://docs.docker.com/engine/api/v1.41/#operation/ContainerAttach
"""

import asyncio
import logging
import struct

from typing import AsyncIterable, Callable, Optional, Tuple

from aiohttp import ClientError, ClientResponse

from .exceptions import DecodeError, ProtocolViolation, TransportError
from .typing import StreamType, TtyChunk
from .utils import CHUNK_SIZE

LOGGER = logging.getLogger(__name__)

HEADER = struct.Struct(">BxxxL")


class TtyChunkReader:
    """
    Read-half of an attach stream; an asynchronous iterator of TtyChunk.

    A malformed frame raises DecodeError for that item only; iteration may be resumed afterwards. A stdin frame, or a
    failure of the underlying transport, is fatal and is raised again by every subsequent read.
    """

    def __init__(
        self,
        chunks: AsyncIterable[bytes],
        *,
        multiplexed: bool = True,
        on_close: Callable[[], None] = None,
    ):
        """
        Args:
            chunks: The raw byte chunks, as received from the daemon.
            multiplexed: If True, chunks carry framed stdout / stderr data, otherwise raw TTY data.
            on_close: Invoked once, when this half is closed.
        """
        self.buffer = bytearray()
        self.chunks = chunks.__aiter__()
        self.closed = False
        self.eof = False
        self.error = None  # type: Optional[Exception]
        self.multiplexed = multiplexed
        self.on_close = on_close

    def __aiter__(self) -> "TtyChunkReader":
        return self

    async def __anext__(self) -> TtyChunk:
        chunk = await self.read()
        if chunk is None:
            raise StopAsyncIteration
        return chunk

    async def close(self):
        """Stops reading; does not affect the write-half."""
        if self.closed:
            return
        self.closed = True
        self.buffer.clear()
        if self.on_close:
            self.on_close()

    def _next_frame(self) -> Optional[TtyChunk]:
        """
        Extracts the next complete, non-empty, frame from the buffer.

        Returns:
            The corresponding chunk, or None if more data is required.
        """
        while len(self.buffer) >= HEADER.size:
            stream_type, length = HEADER.unpack_from(self.buffer)
            end = HEADER.size + length
            if len(self.buffer) < end:
                return None
            data = bytes(self.buffer[HEADER.size : end])
            del self.buffer[:end]

            if stream_type == StreamType.STDIN:
                self.buffer.clear()
                self.error = ProtocolViolation(
                    "Received a stdin frame from the read side of an attach stream"
                )
                raise self.error
            if stream_type not in (StreamType.STDOUT, StreamType.STDERR):
                LOGGER.debug(
                    "Discarding %d byte frame of unknown stream type: %d",
                    length,
                    stream_type,
                )
                raise DecodeError(f"Unknown stream type: {stream_type}")
            if data:
                return TtyChunk(stream=StreamType(stream_type), data=data)
        return None

    async def _next_chunk(self) -> Optional[bytes]:
        """Retrieves the next raw chunk from the transport, or None at end of stream."""
        if self.eof:
            return None
        try:
            return await self.chunks.__anext__()
        except StopAsyncIteration:
            self.eof = True
            return None
        except (ClientError, OSError, asyncio.TimeoutError) as exception:
            self.error = TransportError(f"Attach stream failed: {exception}")
            raise self.error from exception

    async def read(self) -> Optional[TtyChunk]:
        """
        Retrieves the next chunk from the attach stream.

        Returns:
            The next chunk, or None if the stream has ended or this half is closed.
        """
        if self.error:
            raise self.error
        while not self.closed:
            if self.multiplexed:
                chunk = self._next_frame()
                if chunk:
                    return chunk
            data = await self._next_chunk()
            if data is None:
                if self.buffer:
                    size = len(self.buffer)
                    self.buffer.clear()
                    raise DecodeError(
                        f"Attach stream ended within a frame: {size} bytes"
                    )
                return None
            if not self.multiplexed:
                if data:
                    return TtyChunk.stdout(data)
                continue
            self.buffer.extend(data)
        return None


class TtyChunkWriter:
    """
    Write-half of an attach stream; forwards stdin data to the container.
    """

    def __init__(
        self,
        transport: Optional[asyncio.WriteTransport],
        *,
        on_close: Callable[[], None] = None,
    ):
        """
        Args:
            transport: The transport of the hijacked connection, or None if it is already gone.
            on_close: Invoked once, when this half is closed.
        """
        self.closed = False
        self.on_close = on_close
        self.transport = transport

    def _is_writable(self) -> bool:
        return (
            not self.closed
            and self.transport is not None
            and not self.transport.is_closing()
        )

    async def close(self):
        """Half-closes the connection, signalling EOF on stdin; does not affect the read-half."""
        if self.closed:
            return
        try:
            if self._is_writable() and self.transport.can_write_eof():
                self.transport.write_eof()
        finally:
            self.closed = True
            if self.on_close:
                self.on_close()

    async def write(self, data: bytes):
        """
        Writes data to the standard input of the container.

        Args:
            data: The data to be written.
        """
        if not self._is_writable():
            raise TransportError("Attach stream is closed for writing")
        try:
            self.transport.write(data)
        except (OSError, RuntimeError) as exception:
            raise TransportError(f"Attach stream failed: {exception}") from exception


class TtyMultiplexer:
    """
    Duplex attach stream; split into independently closable read and write halves sharing one connection.
    """

    def __init__(
        self,
        chunks: AsyncIterable[bytes],
        transport: Optional[asyncio.WriteTransport],
        *,
        multiplexed: bool = True,
        on_release: Callable[[], None] = None,
    ):
        """
        Args:
            chunks: The raw byte chunks, as received from the daemon.
            transport: The transport of the hijacked connection, or None if it is already gone.
            multiplexed: If True, chunks carry framed stdout / stderr data, otherwise raw TTY data.
            on_release: Invoked once both halves are closed.
        """
        self.on_release = on_release
        self.open_halves = 2
        self.reader = TtyChunkReader(
            chunks, multiplexed=multiplexed, on_close=self._half_closed
        )
        self.writer = TtyChunkWriter(transport, on_close=self._half_closed)

    async def __aenter__(self) -> "TtyMultiplexer":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @staticmethod
    def from_client_response(
        client_response: ClientResponse, *, multiplexed: bool = True
    ) -> "TtyMultiplexer":
        """
        Initializes a multiplexer over the hijacked connection of an attach response.

        Args:
            client_response: The client response of the attach request.
            multiplexed: If True, the response carries framed stdout / stderr data, otherwise raw TTY data.

        Returns:
            The newly initialized multiplexer.
        """
        # Note: The connection is released as soon as the daemon ends the stream, which may already have happened;
        #       the buffered output remains readable, but the write-half is then unusable.
        connection = client_response.connection
        transport = connection.transport if connection else None
        if transport is None:
            LOGGER.debug("Attach stream ended before it could be written to")
        return TtyMultiplexer(
            client_response.content.iter_chunked(CHUNK_SIZE),
            transport,
            multiplexed=multiplexed,
            on_release=client_response.close,
        )

    def _half_closed(self):
        self.open_halves -= 1
        if self.open_halves == 0 and self.on_release:
            LOGGER.debug("Releasing attach stream connection")
            self.on_release()

    async def close(self):
        """Closes both halves, releasing the underlying connection."""
        await self.reader.close()
        await self.writer.close()

    def split(self) -> Tuple[TtyChunkReader, TtyChunkWriter]:
        """
        Splits the stream into its read and write halves.

        Returns:
            The read-half and the write-half.
        """
        return self.reader, self.writer
