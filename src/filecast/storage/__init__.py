"""Persistence collaborators: uploaded files and user records."""
from filecast.storage.blobs import BlobStore, unique_name
from filecast.storage.users import User, UserRepository

__all__ = [
    "BlobStore",
    "User",
    "UserRepository",
    "unique_name",
]
