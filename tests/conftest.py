"""Pytest configuration and fixtures."""

import sys
from collections.abc import Iterator
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient

from filecast.app import create_app
from filecast.config import Settings
from filecast.events import SubscriberRegistry


class RecordingSink:
    """Sink that keeps every frame written to it."""

    def __init__(self) -> None:
        self.frames: list[bytes] = []
        self.closed = False

    def write(self, frame: bytes) -> None:
        if self.closed:
            raise ConnectionResetError("sink closed")
        self.frames.append(frame)

    def close(self) -> None:
        self.closed = True


class BrokenSink:
    """Sink whose connection has already gone away."""

    def __init__(self) -> None:
        self.close_calls = 0

    def write(self, frame: bytes) -> None:
        raise BrokenPipeError("client disconnected")

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create test settings backed by a temporary directory."""
    return Settings(
        host="127.0.0.1",
        port=3000,
        debug=True,
        upload_dir=str(tmp_path / "uploads"),
        database_path=str(tmp_path / "filecast.db"),
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Create test client with the application lifespan running."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registry() -> SubscriberRegistry:
    """Create an empty subscriber registry."""
    return SubscriberRegistry(sink_queue_size=4)
