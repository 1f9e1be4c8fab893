#!/usr/bin/env python3
"""
Delay Queue CLI — Schedule, inspect and consume messages.

Usage:
    # Schedule a payload 30 seconds from now (prints the message id):
    python scripts/delayq.py add "hello" --delay 30

    # List pending messages with their deadlines:
    python scripts/delayq.py peek

    # Print messages as they come due (Ctrl-C to stop):
    python scripts/delayq.py consume --poll-period 0.5

Backend, Redis URL and queue name come from config/settings.yaml
(or the file named by DELAYQ_CONFIG). The memory backend only makes sense
for consume within a single process, so use backend: redis here.
"""
import asyncio
import logging
import os
import signal
import sys
import argparse

import structlog

# Ensure app root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


async def cmd_add(queue, data: str, delay: float):
    msg_id = await queue.add(data.encode("utf-8"), delay)
    print(msg_id)


async def cmd_peek(queue):
    pending = await queue.pending()
    if not pending:
        print("(empty)")
        return
    for msg in pending:
        print(f"{msg.deadline_at.isoformat()}  {msg.id}  {msg.data!r}")


async def cmd_consume(queue, dequeue_config):
    from job_queue import Cancelled

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, stop.set)
        loop.add_signal_handler(signal.SIGTERM, stop.set)
    except NotImplementedError:
        pass  # Windows: Ctrl-C raises KeyboardInterrupt instead

    async def handler(msg):
        print(f"{msg.deadline_at.isoformat()}  {msg.id}  {msg.data!r}", flush=True)

    try:
        await queue.dequeue(handler, dequeue_config, stop=stop)
    except Cancelled:
        print("stopped")


async def main(args):
    from config.settings import load_settings
    from job_queue import DelayQueue, DequeueConfig, create_store

    settings = load_settings()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if settings.debug else logging.INFO
        ),
    )
    store = create_store(settings.queue.store_config())
    queue = DelayQueue(store, args.queue or settings.queue.name)

    try:
        if args.command == "add":
            await cmd_add(queue, args.data, args.delay)
        elif args.command == "peek":
            await cmd_peek(queue)
        elif args.command == "consume":
            period = args.poll_period or settings.queue.poll_period
            await cmd_consume(queue, DequeueConfig(poll_period=period))
    finally:
        await store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Delay queue CLI")
    parser.add_argument("--queue", help="Queue name (defaults to queue.name in settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_add = sub.add_parser("add", help="Schedule a message")
    p_add.add_argument("data", help="Payload (UTF-8 text)")
    p_add.add_argument("--delay", type=float, default=0.0, help="Seconds until due")

    sub.add_parser("peek", help="List pending messages")

    p_consume = sub.add_parser("consume", help="Deliver messages as they come due")
    p_consume.add_argument("--poll-period", type=float, help="Seconds between polls")

    asyncio.run(main(parser.parse_args()))
