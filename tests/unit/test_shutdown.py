"""Tests for graceful shutdown functionality."""

import asyncio
import contextlib
from unittest.mock import AsyncMock

import pytest

from src.keylight.core.shutdown import RequestDrain, shutdown_gracefully

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


class TestRequestDrain:
    async def test_counts_requests_inside_track(self):
        drain = RequestDrain()

        async with drain.track():
            assert drain.in_flight == 1

        assert drain.in_flight == 0
        assert not drain.draining

    async def test_failing_request_is_released(self):
        drain = RequestDrain()

        with pytest.raises(RuntimeError):
            async with drain.track():
                raise RuntimeError("boom")

        assert drain.in_flight == 0
        assert await drain.wait_idle(timeout=0.1)

    async def test_concurrent_requests(self):
        drain = RequestDrain()

        async def request(delay: float):
            async with drain.track():
                await asyncio.sleep(delay)

        tasks = [asyncio.create_task(request(0.1)) for _ in range(3)]
        await asyncio.sleep(0.05)
        assert drain.in_flight == 3

        await asyncio.gather(*tasks)
        assert drain.in_flight == 0

    async def test_begin_is_idempotent(self):
        drain = RequestDrain()

        drain.begin()
        drain.begin()

        assert drain.draining
        assert drain.health_body()["status"] == "draining"

    async def test_reset(self):
        drain = RequestDrain()
        drain.begin()

        drain.reset()

        assert not drain.draining
        assert drain.in_flight == 0


class TestShutdownGracefully:
    async def test_idle_server_closes_pool_immediately(self):
        drain = RequestDrain()
        close_pool = AsyncMock()

        drained = await shutdown_gracefully(1.0, close_pool=close_pool, drain=drain)

        assert drained is True
        assert drain.draining
        close_pool.assert_awaited_once()

    async def test_pool_closes_after_in_flight_request_finishes(self):
        drain = RequestDrain()
        events: list[str] = []

        async def request():
            async with drain.track():
                await asyncio.sleep(0.1)
            events.append("request done")

        async def close_pool():
            events.append("pool closed")

        task = asyncio.create_task(request())
        await asyncio.sleep(0.02)

        drained = await shutdown_gracefully(1.0, close_pool=close_pool, drain=drain)
        await task

        assert drained is True
        assert events == ["request done", "pool closed"]

    async def test_pool_closes_when_grace_period_elapses(self):
        drain = RequestDrain()
        close_pool = AsyncMock()

        async def stuck_request():
            async with drain.track():
                await asyncio.sleep(5.0)

        task = asyncio.create_task(stuck_request())
        await asyncio.sleep(0.02)

        drained = await shutdown_gracefully(0.1, close_pool=close_pool, drain=drain)

        assert drained is False
        assert drain.in_flight == 1
        close_pool.assert_awaited_once()

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
