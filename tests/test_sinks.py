"""Queue sink tests."""

import pytest

from filecast.events import QueueSink, SinkClosedError


async def test_frames_drain_in_write_order() -> None:
    """Frames come out in the order written and stop after close."""
    sink = QueueSink(maxsize=10)
    sink.write(b"one")
    sink.write(b"two")
    sink.close()

    assert [frame async for frame in sink.frames()] == [b"one", b"two"]


async def test_full_queue_drops_oldest() -> None:
    """A slow reader loses the oldest frames instead of blocking the writer."""
    sink = QueueSink(maxsize=2)
    for frame in (b"1", b"2", b"3"):
        sink.write(frame)

    assert sink.dropped_frames == 1
    sink.close()
    received = [frame async for frame in sink.frames()]
    assert received == [b"3"]
    assert sink.dropped_frames == 2


def test_write_after_close_raises() -> None:
    """Writing to a closed sink fails loudly."""
    sink = QueueSink()
    sink.close()
    sink.close()

    assert sink.closed
    with pytest.raises(SinkClosedError):
        sink.write(b"late")
