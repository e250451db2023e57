"""Greeting endpoints."""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

router = APIRouter(tags=["greeting"])


class MessageResponse(BaseModel):
    """Simple message payload."""

    message: str


@router.get("/", response_class=PlainTextResponse)
async def hello() -> str:
    """Return a plain-text greeting."""
    return "Hello, world!"


@router.get("/abc", response_model=MessageResponse)
async def welcome() -> MessageResponse:
    """Return the API welcome message."""
    return MessageResponse(message="Welcome to the API")


@router.get("/api", response_model=MessageResponse)
async def api_root() -> MessageResponse:
    return MessageResponse(message="Welcome to the abc")
