"""Profile endpoints: create, fetch, replace responses, shared lookup."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from workwithme.http.params import parse_object_id
from workwithme.logic import answers, profiles
from workwithme.logic.errors import NotFoundError
from workwithme.models.profile import CreateProfileRequest, Profile, UpdateProfileRequest

router = APIRouter(prefix="/api/profiles")
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=Profile,
    status_code=201,
    summary="Create a profile",
    operation_id="createProfile",
)
def create_profile(payload: CreateProfileRequest) -> Profile:
    return profiles.create_profile(payload.name)


@router.get(
    "/share/{shareable_id}",
    response_model=Profile,
    summary="Fetch a profile by its shareable id",
    operation_id="getSharedProfile",
)
def get_shared_profile(shareable_id: str) -> Profile:
    profile = profiles.get_profile_by_shareable_id(shareable_id.strip())
    if profile is None:
        raise NotFoundError("Shared profile not found")
    return profile


@router.get(
    "/{profile_id}",
    response_model=Profile,
    summary="Fetch a profile",
    operation_id="getProfile",
)
def get_profile(profile_id: str) -> Profile:
    pid = parse_object_id(profile_id, "profile")
    profile = profiles.get_profile(pid)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


@router.put(
    "/{profile_id}",
    response_model=Profile,
    summary="Replace a profile's responses",
    operation_id="updateProfile",
)
def update_profile(profile_id: str, payload: UpdateProfileRequest) -> Profile:
    """Validate every answered pair against the active catalog, then replace the map.

    The stored map is rebuilt from the resolved typed answers.
    """
    pid = parse_object_id(profile_id, "profile")
    resolved = answers.validate_responses(payload.responses)
    entries = {
        category_id: {qid: answers.to_entry(answer) for qid, answer in typed.items()}
        for category_id, typed in resolved.items()
    }
    return profiles.update_profile(pid, entries)


__all__ = ["router"]
