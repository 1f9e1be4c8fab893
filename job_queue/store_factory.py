"""
Store Factory — Create the ordered store backend from configuration.

Configuration in settings.yaml:
    queue:
      # "memory": in-process sorted sets (development, tests)
      # "redis":  shared Redis sorted sets (production, multi-process)
      backend: "memory"
      redis_url: "redis://localhost:6379"

Usage:
    from job_queue.store_factory import create_store, get_store
    store = create_store({"backend": "redis", "redis_url": "redis://..."})
    store = get_store()
"""
from __future__ import annotations

import structlog
from typing import Any, Optional

from job_queue.store_base import OrderedStore

logger = structlog.get_logger()

_instance: Optional[OrderedStore] = None


def create_store(config: dict[str, Any] = None) -> OrderedStore:
    """Factory: create the appropriate store backend. Returns the existing singleton if any."""
    global _instance
    if _instance is not None:
        return _instance

    config = config or {}
    backend = config.get("backend", "memory")

    if backend == "redis":
        from job_queue.store_redis import RedisOrderedStore
        url = config.get("redis_url") or "redis://localhost:6379"
        _instance = RedisOrderedStore.from_url(url)
    elif backend == "memory":
        from job_queue.store_memory import InMemoryOrderedStore
        _instance = InMemoryOrderedStore()
    else:
        raise ValueError(f"unknown store backend: {backend!r}")

    logger.info("store_created", backend=backend)
    return _instance


def get_store() -> OrderedStore:
    """Return the singleton store, creating a memory store if none exists."""
    global _instance
    if _instance is None:
        return create_store()
    return _instance


def reset_store():
    """Drop the singleton (used by tests)."""
    global _instance
    _instance = None
