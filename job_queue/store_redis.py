"""
RedisOrderedStore — Redis sorted sets via redis.asyncio.

Command mapping:
  insert_if_absent  → ZADD key NX score member
  remove            → ZREM key member
  range_by_score    → ZRANGEBYSCORE key min max WITHSCORES

The client must be created with decode_responses=False: members are raw
envelope bytes and must round-trip exactly for ZREM to find them.
"""
from __future__ import annotations

import structlog
from typing import Any

from redis.exceptions import RedisError

from job_queue.errors import StoreError
from job_queue.store_base import OrderedStore, ScoredMember

logger = structlog.get_logger()


class RedisOrderedStore(OrderedStore):

    def __init__(self, client: Any):
        self._redis = client

    @classmethod
    def from_url(cls, redis_url: str = "redis://localhost:6379", **kwargs) -> RedisOrderedStore:
        import redis.asyncio as aioredis
        client = aioredis.from_url(
            redis_url,
            decode_responses=False,
            max_connections=kwargs.pop("max_connections", 20),
            **kwargs,
        )
        logger.info("redis_store_created", url=redis_url)
        return cls(client)

    async def insert_if_absent(self, key: str, score: float, member: bytes) -> int:
        try:
            count = await self._redis.zadd(key, {member: score}, nx=True)
        except RedisError as e:
            raise StoreError(f"ZADD NX {key}: {e}") from e
        return int(count)

    async def remove(self, key: str, member: bytes) -> None:
        try:
            await self._redis.zrem(key, member)
        except RedisError as e:
            raise StoreError(f"ZREM {key}: {e}") from e

    async def range_by_score(self, key: str, min_score: float, max_score: float) -> list[ScoredMember]:
        try:
            rows = await self._redis.zrangebyscore(key, min_score, max_score, withscores=True)
        except RedisError as e:
            raise StoreError(f"ZRANGEBYSCORE {key}: {e}") from e

        result = []
        for row in rows:
            try:
                member, score = row
                result.append(ScoredMember(bytes(member), float(score)))
            except (TypeError, ValueError) as e:
                raise StoreError(f"unexpected ZRANGEBYSCORE reply: {row!r}") from e
        return result

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            raise StoreError(f"PING: {e}") from e

    async def close(self) -> None:
        await self._redis.aclose()
