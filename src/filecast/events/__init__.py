"""Events subsystem for broadcasting uploads to SSE subscribers."""
from filecast.events.registry import SubscriberRegistry, encode_frame
from filecast.events.sinks import QueueSink, Sink, SinkClosedError
from filecast.events.types import Subscriber, UploadEvent

__all__ = [
    "QueueSink",
    "Sink",
    "SinkClosedError",
    "Subscriber",
    "SubscriberRegistry",
    "UploadEvent",
    "encode_frame",
]
