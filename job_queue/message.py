"""
Message model and envelope codec.

Envelope (the sorted-set member):
  {"id":"<id>","data":"<base64 payload>"}

The deadline is never part of the envelope. It travels only as the entry's
score, so two messages with the same id and data are the same member no
matter when they are due. The encoding is compact, key-ordered JSON and
matches what Go's encoding/json produces, including its escaping of <, >, &
and U+2028/U+2029, so Go and Python producers writing the same message
collide on ZADD NX and share a queue.
"""
from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from job_queue.errors import DecodeError

NANOS_PER_SECOND = 1_000_000_000

# encoding/json escapes these even inside otherwise raw UTF-8 output
_GO_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


@dataclass
class Message:
    """A scheduled payload."""
    id: str
    data: bytes = b""
    deadline: int = 0  # nanoseconds since the Unix epoch

    @property
    def deadline_at(self) -> datetime:
        return datetime.fromtimestamp(self.deadline / NANOS_PER_SECOND, tz=timezone.utc)

    def encode(self) -> bytes:
        return encode_message(self)


def encode_message(msg: Message) -> bytes:
    envelope = {
        "id": msg.id,
        "data": base64.b64encode(msg.data).decode("ascii"),
    }
    encoded = json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)
    return encoded.translate(_GO_ESCAPES).encode("utf-8")


def decode_message(member: bytes, deadline: int = 0) -> Message:
    """Parse an envelope. Raises DecodeError on anything malformed."""
    try:
        raw: Any = json.loads(member)
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(str(e), member) from e

    if not isinstance(raw, dict):
        raise DecodeError("envelope is not an object", member)

    msg_id = raw.get("id")
    if not isinstance(msg_id, str):
        raise DecodeError("missing or non-string id", member)

    data = raw.get("data")
    if data is None:
        payload = b""  # Go marshals a nil []byte as null
    elif isinstance(data, str):
        try:
            payload = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"data is not base64: {e}", member) from e
    else:
        raise DecodeError("non-string data", member)

    return Message(id=msg_id, data=payload, deadline=deadline)
