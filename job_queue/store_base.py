"""
Abstract Ordered Store — the sorted-set contract the delay queue runs on.

Implementations:
  - RedisOrderedStore    (Redis sorted sets via redis.asyncio)
  - InMemoryOrderedStore (single-process, no persistence)

Each operation is atomic on its own. Nothing composes them atomically, so a
range read followed by a remove can race with another consumer doing the same.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple


class ScoredMember(NamedTuple):
    member: bytes
    score: float


class OrderedStore(ABC):
    """Keyed, score-ordered collection of unique byte members."""

    @abstractmethod
    async def insert_if_absent(self, key: str, score: float, member: bytes) -> int:
        """Insert member with score unless it is already present. Returns 1 if inserted, else 0."""
        ...

    @abstractmethod
    async def remove(self, key: str, member: bytes) -> None:
        """Remove member if present. Absent members are not an error."""
        ...

    @abstractmethod
    async def range_by_score(self, key: str, min_score: float, max_score: float) -> list[ScoredMember]:
        """Members with min_score <= score <= max_score, ascending by score then member bytes."""
        ...

    async def close(self) -> None:
        """Release any underlying connections."""
