"""
InMemoryOrderedStore — Sorted-set store for development and testing.

Features:
  - Zero dependencies (no Redis)
  - Same ordering as Redis: score ascending, ties broken by member bytes
  - Single event loop only; all data lost on process restart
"""
from __future__ import annotations

import bisect

from job_queue.store_base import OrderedStore, ScoredMember


class InMemoryOrderedStore(OrderedStore):
    """Per-key sorted list of (score, member) plus a member → score index."""

    def __init__(self):
        self._entries: dict[str, list[tuple[float, bytes]]] = {}
        self._scores: dict[str, dict[bytes, float]] = {}

    async def insert_if_absent(self, key: str, score: float, member: bytes) -> int:
        scores = self._scores.setdefault(key, {})
        if member in scores:
            return 0
        scores[member] = score
        bisect.insort(self._entries.setdefault(key, []), (score, member))
        return 1

    async def remove(self, key: str, member: bytes) -> None:
        scores = self._scores.get(key)
        if not scores or member not in scores:
            return
        score = scores.pop(member)
        entries = self._entries[key]
        entries.pop(bisect.bisect_left(entries, (score, member)))
        if not entries:
            # an empty sorted set does not exist in Redis either
            del self._entries[key]
            del self._scores[key]

    async def range_by_score(self, key: str, min_score: float, max_score: float) -> list[ScoredMember]:
        entries = self._entries.get(key, [])
        lo = bisect.bisect_left(entries, (min_score,))
        result = []
        for score, member in entries[lo:]:
            if score > max_score:
                break
            result.append(ScoredMember(member, score))
        return result
