"""
Job Queue — Redis-backed delay queue.

Producers schedule opaque payloads for a future deadline; a consumer loop
delivers each one to a handler at that deadline and removes it only after the
handler succeeds (at-least-once).

Backends:
  - Redis sorted sets (production, shared across processes)
  - In-memory sorted sets (development/testing)

Quick start:
  from job_queue import DelayQueue, create_store
  queue = DelayQueue(create_store({"backend": "memory"}), "reminders")
  await queue.add(b"hello", delay=5)
  await queue.dequeue(handler)
"""
from job_queue.clock import Clock, SystemClock, VirtualClock
from job_queue.delay_queue import DelayQueue, DequeueConfig, Handler
from job_queue.errors import (
    Cancelled, DecodeError, DelayQueueError, DuplicateEntryError, StoreError,
)
from job_queue.message import Message, decode_message, encode_message
from job_queue.store_base import OrderedStore, ScoredMember
from job_queue.store_memory import InMemoryOrderedStore
from job_queue.store_factory import create_store, get_store, reset_store

__all__ = [
    # Queue
    "DelayQueue", "DequeueConfig", "Handler",
    # Messages
    "Message", "encode_message", "decode_message",
    # Stores
    "OrderedStore", "ScoredMember", "InMemoryOrderedStore",
    "create_store", "get_store", "reset_store",
    # Clocks
    "Clock", "SystemClock", "VirtualClock",
    # Errors
    "DelayQueueError", "DuplicateEntryError", "StoreError", "DecodeError", "Cancelled",
]
