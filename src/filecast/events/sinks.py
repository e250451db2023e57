"""Writable endpoints for streaming connections."""
import asyncio
from collections.abc import AsyncIterator
from typing import Protocol


class SinkClosedError(Exception):
    """Raised when writing to a sink that has already been closed."""


class Sink(Protocol):
    """Writable endpoint of a streaming connection.

    Implementations must not block in ``write``; a sink that cannot accept
    a frame raises instead.
    """

    def write(self, frame: bytes) -> None: ...

    def close(self) -> None: ...


class QueueSink:
    """Bounded in-memory sink feeding a single SSE response.

    Frames are buffered in an asyncio queue and drained by ``frames()``.
    When the queue is full the oldest pending frame is dropped so a slow
    client never blocks the writer.

    Attributes:
        maxsize: Maximum number of pending frames.
    """

    def __init__(self, maxsize: int = 100) -> None:
        """Initialize queue sink.

        Args:
            maxsize: Maximum number of frames buffered for the client.
        """
        self._queue: asyncio.Queue[bytes | None] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._dropped_count = 0

    @property
    def closed(self) -> bool:
        """Whether the sink has been closed."""
        return self._closed

    @property
    def dropped_frames(self) -> int:
        """Number of frames discarded because the client fell behind."""
        return self._dropped_count

    def _put(self, item: bytes | None) -> None:
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            self._queue.get_nowait()
            self._queue.put_nowait(item)
            self._dropped_count += 1

    def write(self, frame: bytes) -> None:
        """Queue a frame for delivery.

        Args:
            frame: Encoded SSE frame.

        Raises:
            SinkClosedError: If the sink was closed.
        """
        if self._closed:
            raise SinkClosedError("sink is closed")
        self._put(frame)

    def close(self) -> None:
        """Close the sink and wake the reader. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._put(None)

    async def frames(self) -> AsyncIterator[bytes]:
        """Yield queued frames until the sink is closed.

        Yields:
            Encoded SSE frames in write order.
        """
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame
