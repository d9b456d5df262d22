"""Identifier and timestamp helpers.

Record ids are ObjectId-shaped: 24 lowercase hex characters whose first 8
encode the creation second, so lexical id order follows insertion order.
"""

from __future__ import annotations

import re
import secrets
import time
import uuid
from datetime import datetime, timedelta, timezone

_OBJECT_ID_RE = re.compile(r"[0-9a-f]{24}")


def new_object_id() -> str:
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def is_object_id(value: str | None) -> bool:
    if not isinstance(value, str):
        return False
    return _OBJECT_ID_RE.fullmatch(value.strip().lower()) is not None


def normalize_object_id(value: str) -> str:
    return value.strip().lower()


def new_shareable_id() -> str:
    return str(uuid.uuid4())


def format_timestamp(moment: datetime) -> str:
    """Render as ISO-8601 UTC with microseconds and a trailing 'Z'."""
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def later_than(previous: str) -> str:
    """Return now, or one microsecond after `previous` when the clock has not advanced."""
    now = datetime.now(timezone.utc)
    floor = parse_timestamp(previous) + timedelta(microseconds=1)
    return format_timestamp(max(now, floor))


__all__ = [
    "new_object_id",
    "is_object_id",
    "normalize_object_id",
    "new_shareable_id",
    "format_timestamp",
    "utc_now",
    "parse_timestamp",
    "later_than",
]
