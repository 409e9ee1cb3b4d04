"""Graceful shutdown: report draining, let requests finish, then close the pool.

Order on shutdown:
1. ``/health`` switches to 503 so load balancers stop routing here.
2. In-flight requests get up to the grace period to finish.
3. The connection pool is disposed, whether or not the drain completed.
"""

import asyncio
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from src.keylight.core.db.engine import dispose_engine
from src.keylight.core.logging import get_logger

logger = get_logger(__name__)


class RequestDrain:
    """In-flight request count plus the draining flag read by ``/health``."""

    def __init__(self) -> None:
        self.in_flight = 0
        self.draining = False
        self._idle = asyncio.Event()
        self._idle.set()

    @asynccontextmanager
    async def track(self) -> AsyncGenerator[None]:
        """Count the enclosed request as in flight until it returns or raises."""
        self.in_flight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self.in_flight -= 1
            if self.in_flight == 0:
                self._idle.set()

    def begin(self) -> None:
        """Enter draining mode. Calling it again is a no-op."""
        if self.draining:
            return
        self.draining = True
        logger.info("Draining requests", in_flight=self.in_flight)

    async def wait_idle(self, timeout: float) -> bool:
        """True once no request is in flight, False if ``timeout`` elapses first."""
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return True

    def health_body(self) -> dict[str, Any]:
        return {
            "status": "draining",
            "in_flight_requests": self.in_flight,
            "message": "Server is shutting down",
        }

    def reset(self) -> None:
        """Return to the initial state. Used by tests."""
        self.in_flight = 0
        self.draining = False
        self._idle = asyncio.Event()
        self._idle.set()


request_drain = RequestDrain()


async def shutdown_gracefully(
    grace_period: float,
    close_pool: Callable[[], Awaitable[None]] = dispose_engine,
    drain: RequestDrain = request_drain,
) -> bool:
    """Drain in-flight requests, then close the connection pool.

    Args:
        grace_period: Seconds to wait for in-flight requests.
        close_pool: Disposes the connection pool; always awaited last.
        drain: The request drain to wait on.

    Returns:
        True if every request finished within the grace period.
    """
    drain.begin()
    started = time.monotonic()
    drained = await drain.wait_idle(grace_period)
    waited = round(time.monotonic() - started, 3)
    if drained:
        logger.info("All requests drained", waited_s=waited)
    else:
        logger.warning(
            "Grace period elapsed, closing pool with requests in flight",
            grace_period=grace_period,
            in_flight=drain.in_flight,
        )
    await close_pool()
    logger.info("Database pool closed")
    return drained
