"""Shutdown coordination between signal handlers and the server."""
import asyncio

import structlog

logger = structlog.get_logger()


class GracefulShutdown:
    """Signals shutdown to tasks waiting on it.

    Attributes:
        is_triggered: Whether shutdown has been triggered.
    """

    def __init__(self) -> None:
        self._triggered = False
        self._event = asyncio.Event()

    @property
    def is_triggered(self) -> bool:
        """Check if shutdown has been triggered."""
        return self._triggered

    def trigger(self) -> None:
        """Signal all waiting tasks to begin shutdown.

        Idempotent - calling multiple times has no additional effect.
        """
        if self._triggered:
            return
        logger.info("shutdown_triggered")
        self._triggered = True
        self._event.set()

    async def wait_for_trigger(self) -> None:
        """Block until trigger() is called from another task or signal handler."""
        await self._event.wait()
