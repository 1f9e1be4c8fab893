"""Clock abstraction so the consumer loop can be driven by virtual time in tests."""
from __future__ import annotations

import asyncio
import time
from typing import Protocol

from job_queue.message import NANOS_PER_SECOND


class Clock(Protocol):
    def time_ns(self) -> int:
        """Current wall-clock time in nanoseconds since the Unix epoch."""

    async def sleep_until(self, deadline: int) -> None:
        """Suspend until time_ns() >= deadline. Returns at once if already past."""


class SystemClock:
    """Real time, backed by time.time_ns and asyncio.sleep."""

    def time_ns(self) -> int:
        return time.time_ns()

    async def sleep_until(self, deadline: int) -> None:
        remaining = deadline - time.time_ns()
        if remaining > 0:
            await asyncio.sleep(remaining / NANOS_PER_SECOND)


class VirtualClock:
    """
    Deterministic clock for tests.

    Sleeping advances the clock instantly to the requested deadline and
    records the wait (in nanoseconds) in `sleeps`. Time never moves backwards.
    """

    def __init__(self, start: int = 0):
        self.now = start
        self.sleeps: list[int] = []

    def time_ns(self) -> int:
        return self.now

    async def sleep_until(self, deadline: int) -> None:
        wait = max(0, deadline - self.now)
        self.sleeps.append(wait)
        self.now += wait
        await asyncio.sleep(0)
