"""
Delay queue errors.

Nothing here is retried internally; every error ends the operation that
raised it and is left to the caller to handle.
"""
from __future__ import annotations


class DelayQueueError(Exception):
    """Base class for all delay queue errors."""


class DuplicateEntryError(DelayQueueError):
    """Admission rejected: identical {id, data} bytes are already queued."""

    def __init__(self, queue: str, message_id: str):
        self.queue = queue
        self.message_id = message_id
        super().__init__(f"element already exists: queue={queue} id={message_id}")


class StoreError(DelayQueueError):
    """Transport or protocol failure from the ordered store."""


class DecodeError(DelayQueueError):
    """A member fetched from the store is not a valid message envelope."""

    def __init__(self, reason: str, member: bytes = b""):
        self.member = member
        super().__init__(f"malformed message envelope: {reason}")


class Cancelled(DelayQueueError):
    """The consumer loop observed its stop event."""
