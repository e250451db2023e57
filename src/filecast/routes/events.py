"""SSE streaming endpoint for upload notifications."""

from fastapi import APIRouter, Depends, Request
from sse_starlette.sse import EventSourceResponse

from filecast.config import Settings
from filecast.dependencies import get_registry
from filecast.events import SubscriberRegistry

router = APIRouter(tags=["events"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.get("/events")
async def event_stream(
    request: Request,
    registry: SubscriberRegistry = Depends(get_registry),
) -> EventSourceResponse:
    """Stream upload notifications via Server-Sent Events.

    Each upload produces one ``data: {"filename": ..., "path": ...}`` frame.
    The subscription lasts until the client disconnects or the server shuts
    down; keep-alive pings are sent as SSE comments.

    Args:
        request: FastAPI request object.
        registry: Registry the connection subscribes to.

    Returns:
        SSE response stream of upload events.
    """
    settings: Settings = request.app.state.settings

    return EventSourceResponse(
        registry.subscribe(),
        headers=SSE_HEADERS,
        ping=settings.sse_ping_interval,
        sep="\n",
    )
