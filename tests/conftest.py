"""Shared test fixtures for the delay queue."""
import pytest

from helpers import QUEUE_NAME, T0
from job_queue import DelayQueue, InMemoryOrderedStore, VirtualClock


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock(start=T0)


@pytest.fixture
def memory_store() -> InMemoryOrderedStore:
    return InMemoryOrderedStore()


@pytest.fixture
def queue(memory_store, clock) -> DelayQueue:
    return DelayQueue(memory_store, QUEUE_NAME, clock=clock)
