"""Shared constants and builders for the delay queue tests."""
from job_queue import Message

QUEUE_NAME = "delayq"

# Below 2**53 so float scores hold these deadlines exactly.
T0 = 1_000_000_000_000_000
MS = 1_000_000


def make_msg(i: int) -> Message:
    """Message i is due 200ms after message i-1."""
    return Message(id=str(i), data=str(i).encode(), deadline=T0 + 200 * MS * i)
