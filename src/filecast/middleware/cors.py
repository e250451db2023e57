"""CORS middleware configuration."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def configure_cors(app: FastAPI, allowed_origins: list[str]) -> None:
    """Add CORS middleware with specified allowed origins.

    Credentials are only allowed for an explicit origin list, since browsers
    reject credentialed responses for a ``*`` origin.

    Args:
        app: FastAPI application instance.
        allowed_origins: Allowed origin URLs, or ``["*"]`` for any.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials="*" not in allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
