"""Live subscriber registry with fan-out broadcasting."""
import threading
import uuid
from collections.abc import AsyncIterator

import structlog
from pydantic import BaseModel
from sse_starlette import ServerSentEvent

from filecast.events.sinks import QueueSink, Sink, SinkClosedError
from filecast.events.types import Subscriber

logger = structlog.get_logger()


def encode_frame(payload: BaseModel) -> bytes:
    """Serialize a payload into a complete SSE data frame.

    Args:
        payload: Model to send as the frame's JSON data.

    Returns:
        Frame bytes of the form ``data: <json>\\n\\n``.
    """
    return ServerSentEvent(data=payload.model_dump_json(), sep="\n").encode()


class SubscriberRegistry:
    """Set of currently connected event listeners.

    Mutations are serialized by a lock. Broadcasts copy the subscriber set
    under the lock and write to sinks after releasing it, so a slow sink
    never holds up registration or removal.
    """

    def __init__(self, sink_queue_size: int = 100) -> None:
        """Initialize an empty registry.

        Args:
            sink_queue_size: Maximum pending frames per streaming subscriber.
        """
        self._subscribers: dict[str, Subscriber] = {}
        self._sink_queue_size = sink_queue_size
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of currently registered subscribers."""
        with self._lock:
            return len(self._subscribers)

    def register(self, sink: Sink) -> str:
        """Add a sink to the registry.

        Args:
            sink: Open, writable sink for one connection.

        Returns:
            Identifier of the new subscriber.
        """
        subscriber_id = str(uuid.uuid4())
        with self._lock:
            self._subscribers[subscriber_id] = Subscriber(id=subscriber_id, sink=sink)
            count = len(self._subscribers)

        logger.info(
            "subscriber_registered",
            subscriber_id=subscriber_id,
            active_subscribers=count,
        )
        return subscriber_id

    def deregister(self, subscriber_id: str) -> None:
        """Remove a subscriber and close its sink.

        Unknown ids are ignored, so racing disconnects are harmless.

        Args:
            subscriber_id: Identifier returned by register().
        """
        with self._lock:
            subscriber = self._subscribers.pop(subscriber_id, None)
            if subscriber is None:
                return
            subscriber.sink.close()
            count = len(self._subscribers)

        logger.info(
            "subscriber_deregistered",
            subscriber_id=subscriber_id,
            active_subscribers=count,
        )

    def broadcast(self, payload: BaseModel) -> int:
        """Deliver a payload to every registered subscriber.

        The payload is encoded once. Sinks that fail are removed and never
        affect delivery to the rest.

        Args:
            payload: Model to send to all subscribers.

        Returns:
            Number of subscribers the frame was written to.
        """
        frame = encode_frame(payload)
        with self._lock:
            snapshot = list(self._subscribers.values())

        delivered = 0
        for subscriber in snapshot:
            try:
                subscriber.sink.write(frame)
            except SinkClosedError:
                logger.debug("subscriber_sink_closed", subscriber_id=subscriber.id)
                self.deregister(subscriber.id)
                continue
            except Exception as e:
                logger.warning(
                    "subscriber_write_failed",
                    subscriber_id=subscriber.id,
                    error=str(e),
                )
                self.deregister(subscriber.id)
                continue
            delivered += 1

        logger.debug("broadcast_sent", subscribers=len(snapshot), delivered=delivered)
        return delivered

    async def subscribe(self) -> AsyncIterator[bytes]:
        """Stream broadcast frames for one connection.

        Registers a queue-backed sink on first iteration and deregisters it
        when the generator finishes for any reason: client disconnect
        (cancellation), explicit close, or registry shutdown.

        Under EventSourceResponse the first iteration happens after the
        response headers are sent, so a broadcast racing that window is not
        delivered to this connection. Every later broadcast is.

        Yields:
            Encoded SSE frames.
        """
        sink = QueueSink(maxsize=self._sink_queue_size)
        subscriber_id = self.register(sink)
        try:
            async for frame in sink.frames():
                yield frame
        finally:
            self.deregister(subscriber_id)
            if sink.dropped_frames:
                logger.info(
                    "subscriber_frames_dropped",
                    subscriber_id=subscriber_id,
                    dropped=sink.dropped_frames,
                )

    def close(self) -> None:
        """Deregister all subscribers, ending their streams."""
        with self._lock:
            subscriber_ids = list(self._subscribers)

        for subscriber_id in subscriber_ids:
            self.deregister(subscriber_id)

        logger.info("subscriber_registry_closed", closed=len(subscriber_ids))
