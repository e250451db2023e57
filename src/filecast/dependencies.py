"""FastAPI dependencies resolving the collaborators built at startup."""
from fastapi import Request

from filecast.events import SubscriberRegistry
from filecast.storage import BlobStore, UserRepository


def get_registry(request: Request) -> SubscriberRegistry:
    """Return the process-wide subscriber registry."""
    return request.app.state.registry


def get_blob_store(request: Request) -> BlobStore:
    """Return the upload blob store."""
    return request.app.state.blob_store


def get_user_repository(request: Request) -> UserRepository:
    """Return the user repository."""
    return request.app.state.user_repository
