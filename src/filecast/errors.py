"""Exception handlers shaping error responses."""
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request input as a client error."""
    logger.info("request_invalid", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> PlainTextResponse:
    """Log unexpected failures and return a generic 500."""
    logger.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return PlainTextResponse("Something went wrong!", status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the application's exception handlers.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
