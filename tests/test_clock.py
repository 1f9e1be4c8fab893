"""Tests for real and virtual clocks."""
import time

import pytest

from job_queue import SystemClock, VirtualClock


class TestVirtualClock:
    @pytest.mark.asyncio
    async def test_sleep_advances_and_records(self):
        clock = VirtualClock(start=100)
        await clock.sleep_until(150)
        assert clock.time_ns() == 150
        assert clock.sleeps == [50]

    @pytest.mark.asyncio
    async def test_past_deadline_never_moves_backwards(self):
        clock = VirtualClock(start=100)
        await clock.sleep_until(40)
        assert clock.time_ns() == 100
        assert clock.sleeps == [0]


class TestSystemClock:
    def test_time_ns_is_wall_clock(self):
        before = time.time_ns()
        assert SystemClock().time_ns() >= before

    @pytest.mark.asyncio
    async def test_sleep_until_reaches_deadline(self):
        clock = SystemClock()
        deadline = clock.time_ns() + 20_000_000
        await clock.sleep_until(deadline)
        assert clock.time_ns() >= deadline - 2_000_000  # asyncio timer slack

    @pytest.mark.asyncio
    async def test_sleep_until_past_returns_immediately(self):
        clock = SystemClock()
        start = time.monotonic()
        await clock.sleep_until(clock.time_ns() - 1_000_000_000)
        assert time.monotonic() - start < 0.5
