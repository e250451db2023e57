"""User record endpoints."""
import asyncio
import sqlite3

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from filecast.dependencies import get_user_repository
from filecast.storage import User, UserRepository

logger = structlog.get_logger()

router = APIRouter(prefix="/api/users", tags=["users"])


class UserCreateRequest(BaseModel):
    """Incoming user record.

    Both fields are checked in the handler so a missing value is reported
    as a 400 with a readable message.
    """

    name: str | None = None
    email: str | None = None


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Name and email are required"}},
)
async def create_user(
    body: UserCreateRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    """Create a user.

    Args:
        body: Name and email of the new user.
        repository: User repository.

    Returns:
        The stored user with its id.

    Raises:
        HTTPException: 400 if a field is missing, 500 on database error.
    """
    name, email = body.name, body.email
    if not name or not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and email are required",
        )

    try:
        return await asyncio.to_thread(repository.create, name, email)
    except sqlite3.Error as e:
        logger.error("user_create_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.get("", response_model=list[User])
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[User]:
    """List all users.

    Raises:
        HTTPException: 500 on database error.
    """
    try:
        return await asyncio.to_thread(repository.list_all)
    except sqlite3.Error as e:
        logger.error("user_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e)) from e
