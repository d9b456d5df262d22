"""Path and query parameter parsing shared by route modules."""

from __future__ import annotations

from workwithme.logic.errors import ValidationError
from workwithme.logic.ids import is_object_id, normalize_object_id


def parse_object_id(raw: str | None, label: str) -> str:
    """Return the normalised id or raise ValidationError('Invalid <label> ID format')."""
    if not is_object_id(raw):
        raise ValidationError(f"Invalid {label} ID format")
    return normalize_object_id(str(raw))


__all__ = ["parse_object_id"]
