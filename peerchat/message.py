"""Chat message model and its JSON wire form."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field

_FIELDS = ("id", "sender", "content", "timestamp", "token")


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Message:
    """One chat message; a fresh random id is assigned when none is given."""

    sender: str
    content: str
    timestamp: str
    token: str
    id: str = field(default_factory=_new_id)


def encode_message(message: Message) -> str:
    """Serialise a message to compact JSON text."""
    payload = {name: getattr(message, name) for name in _FIELDS}
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def decode_message(text: str) -> Message:
    """Parse JSON text into a message; raise ValueError if it is not one."""
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("message must be a JSON object")
    values = {}
    for name in _FIELDS:
        if name not in payload:
            raise ValueError(f"message is missing field {name!r}")
        value = payload[name]
        if not isinstance(value, str):
            raise ValueError(f"message field {name!r} must be a string")
        values[name] = value
    return Message(**values)