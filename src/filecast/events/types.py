"""Event and subscriber types for upload broadcasting."""
from dataclasses import dataclass

from pydantic import BaseModel, Field

from filecast.events.sinks import Sink


class UploadEvent(BaseModel):
    """Notification sent to subscribers after a file is stored.

    Attributes:
        filename: Original name of the uploaded file.
        path: Location the file was stored under.
    """

    filename: str = Field(description="Original filename supplied by the client")
    path: str = Field(description="Storage path of the persisted file")


@dataclass(frozen=True)
class Subscriber:
    """One open streaming connection registered for broadcasts."""

    id: str
    sink: Sink
