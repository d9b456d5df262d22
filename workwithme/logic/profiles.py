"""Profile service.

`update_profile` replaces the whole responses map; there is no merge. It does
not consult the catalog, callers validate first (see `answers`).
Concurrent updates to one profile resolve as last write wins.
"""

from __future__ import annotations

import logging
from typing import Mapping

from pydantic import TypeAdapter

from workwithme.db.base import read_only, transaction
from workwithme.logic import repository_profiles as repo
from workwithme.logic.errors import NotFoundError, ValidationError
from workwithme.logic.ids import later_than, new_object_id, new_shareable_id, utc_now
from workwithme.models.profile import Profile, ResponseMap

logger = logging.getLogger(__name__)

_RESPONSE_MAP = TypeAdapter(ResponseMap)


def create_profile(name: str) -> Profile:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name cannot be empty")
    now = utc_now()
    profile = Profile(
        id=new_object_id(),
        name=name.strip(),
        shareable_id=new_shareable_id(),
        created_at=now,
        updated_at=now,
        responses={},
    )
    with transaction("profile.create") as conn:
        repo.insert_profile(conn, profile)
    logger.info("profile_created id=%s", profile.id)
    return profile


def get_profile(profile_id: str) -> Profile | None:
    with read_only("profile.get") as conn:
        return repo.fetch_profile(conn, profile_id)


def get_profile_by_shareable_id(shareable_id: str) -> Profile | None:
    with read_only("profile.get_shared") as conn:
        return repo.fetch_profile_by_shareable_id(conn, shareable_id)


def update_profile(profile_id: str, responses: Mapping) -> Profile:
    parsed = _RESPONSE_MAP.validate_python(responses)
    with transaction("profile.update") as conn:
        current = repo.fetch_profile(conn, profile_id)
        if current is None:
            raise NotFoundError("Profile not found")
        updated = current.model_copy(update={"responses": parsed, "updated_at": later_than(current.updated_at)})
        repo.replace_responses(conn, updated)
    answered = sum(len(v) for v in parsed.values())
    logger.info("profile_updated id=%s categories=%s answers=%s", profile_id, len(parsed), answered)
    return updated


__all__ = [
    "create_profile",
    "get_profile",
    "get_profile_by_shareable_id",
    "update_profile",
]
