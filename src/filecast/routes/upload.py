"""File upload endpoint."""
import asyncio

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from filecast.dependencies import get_blob_store, get_registry
from filecast.events import SubscriberRegistry, UploadEvent
from filecast.storage import BlobStore

logger = structlog.get_logger()

router = APIRouter(tags=["upload"])


@router.post(
    "/upload",
    response_model=UploadEvent,
    responses={400: {"description": "No file uploaded"}},
)
async def upload_file(
    file: UploadFile | None = File(default=None),
    blob_store: BlobStore = Depends(get_blob_store),
    registry: SubscriberRegistry = Depends(get_registry),
) -> UploadEvent:
    """Store an uploaded file and notify event subscribers.

    The response depends only on the storage outcome; notifying
    subscribers cannot change it.

    Args:
        file: Multipart ``file`` field.
        blob_store: Destination for the uploaded bytes.
        registry: Subscribers to notify.

    Returns:
        Original filename and storage path.

    Raises:
        HTTPException: 400 if no file was sent, 500 if it cannot be stored.
    """
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    try:
        path = await asyncio.to_thread(blob_store.save, file.filename, file.file)
    except OSError as e:
        logger.error("upload_store_failed", filename=file.filename, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to store file") from e
    finally:
        await file.close()

    event = UploadEvent(filename=file.filename, path=path)
    try:
        delivered = registry.broadcast(event)
    except Exception as e:
        logger.error("upload_broadcast_failed", path=path, error=str(e))
    else:
        logger.info("upload_broadcast", path=path, delivered_to=delivered)

    return event
