"""
Delay Queue — Schedule payloads for delivery at a future deadline.

Each queue is one sorted set in the ordered store:
  key     = queue name
  score   = deadline, nanoseconds since the Unix epoch (as a float)
  member  = message envelope {"id", "data"} (see job_queue.message)

Producer:
  add() / add_msg() do a conditional insert (ZADD NX). Re-adding the same
  id+data is rejected with DuplicateEntryError whatever the new deadline.

Consumer:
  dequeue() polls [0, now + poll_period], sleeps until each fetched entry's
  exact deadline, awaits the handler, then removes the entry. Removal only
  follows successful handling, so delivery is at-least-once: a handler error
  leaves the entry queued for the next dequeue() run.

  Running several dequeue() loops on one queue delivers duplicates. The
  range read and the remove are separate store calls and two loops can both
  see an entry before either removes it. Serialize consumers externally if
  that matters.

Score precision:
  Current epoch nanoseconds (~1.8e18) exceed the 2**53 integer range of a
  float64 score, so stored deadlines round to the nearest 256 ns. Delivery
  can be that much early or late, and deadlines closer together than that
  may compare equal and fall back to member-byte order.
"""
from __future__ import annotations

import asyncio
import uuid
import structlog
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, NoReturn, Optional

from job_queue.clock import Clock, SystemClock
from job_queue.errors import Cancelled, DuplicateEntryError
from job_queue.message import NANOS_PER_SECOND, Message, decode_message
from job_queue.store_base import OrderedStore

logger = structlog.get_logger()

Handler = Callable[[Message], Awaitable[Any]]


@dataclass
class DequeueConfig:
    poll_period: float = 1.0  # seconds between range queries when nothing is near-due

    def __post_init__(self):
        if self.poll_period_ns <= 0:
            raise ValueError(f"poll_period must be at least 1ns, got {self.poll_period}")

    @property
    def poll_period_ns(self) -> int:
        return int(self.poll_period * NANOS_PER_SECOND)


class DelayQueue:
    """
    Usage:
        queue = DelayQueue(store, "reminders")
        msg_id = await queue.add(b"payload", delay=30)
        await queue.dequeue(handler)   # blocks; always raises
    """

    def __init__(self, store: OrderedStore, name: str, clock: Optional[Clock] = None):
        self.store = store
        self.name = name
        self.clock = clock or SystemClock()

    # ── Producer ──────────────────────────────────────────────

    async def add(self, data: bytes, delay: float) -> str:
        """Queue data for delivery after delay seconds. Returns the generated message id."""
        msg_id = str(uuid.uuid4())
        deadline = self.clock.time_ns() + int(delay * NANOS_PER_SECOND)
        await self.add_msg(Message(id=msg_id, data=data, deadline=deadline))
        return msg_id

    async def add_msg(self, msg: Message) -> None:
        """Queue msg at msg.deadline. Raises DuplicateEntryError if the same id+data is queued."""
        member = msg.encode()
        count = await self.store.insert_if_absent(self.name, float(msg.deadline), member)
        if count == 0:
            logger.warning("delay_queue_duplicate_rejected", queue=self.name, id=msg.id)
            raise DuplicateEntryError(self.name, msg.id)

        logger.info("delay_queue_message_added",
                    queue=self.name,
                    id=msg.id,
                    deadline=msg.deadline)

    # ── Consumer ──────────────────────────────────────────────

    async def dequeue(
        self,
        handler: Handler,
        config: Optional[DequeueConfig] = None,
        stop: Optional[asyncio.Event] = None,
    ) -> NoReturn:
        """
        Deliver messages to handler as their deadlines arrive.

        Never returns. Ends by raising Cancelled (stop was set), StoreError,
        DecodeError, or whatever the handler raised. The stop event is only
        checked between polls; it does not cut short a sleep or a handler.
        """
        config = config or DequeueConfig()
        period = config.poll_period_ns
        logger.info("delay_queue_consumer_started",
                    queue=self.name,
                    poll_period=config.poll_period)

        while True:
            if stop is not None and stop.is_set():
                logger.info("delay_queue_consumer_stopped", queue=self.name, reason="cancelled")
                raise Cancelled(f"dequeue on {self.name!r} cancelled")

            next_poll = self.clock.time_ns() + period
            entries = await self.store.range_by_score(self.name, 0, float(next_poll))
            if entries:
                logger.debug("delay_queue_batch_fetched", queue=self.name, count=len(entries))

            for member, score in entries:
                msg = decode_message(member, deadline=int(score))

                if msg.deadline > self.clock.time_ns():
                    await self.clock.sleep_until(msg.deadline)
                lateness = self.clock.time_ns() - msg.deadline

                try:
                    await handler(msg)
                except Exception as e:
                    logger.error("delay_queue_handler_error",
                                 queue=self.name,
                                 id=msg.id,
                                 error=str(e))
                    raise

                await self.store.remove(self.name, member)
                logger.debug("delay_queue_message_delivered",
                             queue=self.name,
                             id=msg.id,
                             lateness_ns=lateness)

            await self.clock.sleep_until(next_poll)

    # ── Inspection ────────────────────────────────────────────

    async def pending(self) -> list[Message]:
        """All queued messages in delivery order, due or not."""
        entries = await self.store.range_by_score(self.name, 0, float("inf"))
        return [decode_message(member, deadline=int(score)) for member, score in entries]
