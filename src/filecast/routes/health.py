"""Health check endpoints for liveness and readiness probes."""
import asyncio
import sqlite3
from typing import Literal

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from filecast.dependencies import get_blob_store, get_registry, get_user_repository
from filecast.events import SubscriberRegistry
from filecast.storage import BlobStore, UserRepository

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe.

    Attributes:
        status: Always 'alive' when process is running.
    """

    status: Literal["alive"]


class ReadinessCheck(BaseModel):
    """Individual dependency check result.

    Attributes:
        name: Identifier for the dependency being checked.
        status: Result of the check ('ok' or 'failed').
        message: Error details when status is 'failed'.
    """

    name: str
    status: Literal["ok", "failed"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Response model for readiness probe.

    Attributes:
        status: Overall readiness ('ready' or 'not_ready').
        checks: List of individual dependency check results.
        subscribers: Number of connected event subscribers.
    """

    status: Literal["ready", "not_ready"]
    checks: list[ReadinessCheck]
    subscribers: int


def _check_upload_dir(blob_store: BlobStore) -> ReadinessCheck:
    name = f"dir:{blob_store.root}"
    try:
        blob_store.check()
    except OSError as e:
        return ReadinessCheck(name=name, status="failed", message=str(e))
    return ReadinessCheck(name=name, status="ok")


def _check_database(repository: UserRepository) -> ReadinessCheck:
    try:
        repository.ping()
    except (sqlite3.Error, RuntimeError) as e:
        return ReadinessCheck(name="db:users", status="failed", message=str(e))
    return ReadinessCheck(name="db:users", status="ok")


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns immediate success if the process is running.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(
    blob_store: BlobStore = Depends(get_blob_store),
    repository: UserRepository = Depends(get_user_repository),
    registry: SubscriberRegistry = Depends(get_registry),
) -> JSONResponse:
    """Readiness probe endpoint.

    Validates the upload directory and the user database.
    Returns 200 if all checks pass, 503 if any fail.

    Returns:
        Readiness status with individual check results.
    """
    checks = [
        _check_upload_dir(blob_store),
        await asyncio.to_thread(_check_database, repository),
    ]
    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        checks=checks,
        subscribers=registry.subscriber_count,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
