"""Entry point for the API server."""

import asyncio
import contextlib
import signal
import sys

import structlog
import uvicorn
from fastapi import FastAPI

from filecast.app import create_app
from filecast.config import Settings
from filecast.lifecycle import GracefulShutdown
from filecast.logging import configure_logging

logger = structlog.get_logger()


def close_event_streams(app: FastAPI) -> None:
    """End open SSE streams so the server can drain its connections.

    Args:
        app: Application whose registry should be closed, if started.
    """
    registry = getattr(app.state, "registry", None)
    if registry is not None:
        registry.close()


async def serve(settings: Settings) -> None:
    """Run uvicorn server with graceful shutdown support.

    Handles SIGTERM/SIGINT by closing event streams first, then asking
    uvicorn to exit.

    Args:
        settings: Server configuration.
    """
    app = create_app(settings)
    shutdown = GracefulShutdown()

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
        timeout_graceful_shutdown=int(settings.shutdown_timeout),
    )
    server = uvicorn.Server(config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown.trigger)

    async def shutdown_server() -> None:
        """Wait for shutdown signal and stop server."""
        await shutdown.wait_for_trigger()
        close_event_streams(app)
        server.should_exit = True

    async def run_server() -> None:
        """Run uvicorn, releasing the shutdown waiter if it exits first."""
        try:
            await server.serve()
        finally:
            shutdown.trigger()

    logger.info("server_starting", host=settings.host, port=settings.port)
    await asyncio.gather(
        run_server(),
        shutdown_server(),
        return_exceptions=True,
    )


def main() -> None:
    """Entry point for python -m filecast."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=settings.log_json)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve(settings))

    sys.exit(0)


if __name__ == "__main__":
    main()
