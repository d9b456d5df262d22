"""Pydantic models for profiles, their responses, and auxiliary API bodies."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Union

from pydantic import Field, TypeAdapter, ValidationError as PydanticValidationError, field_validator

from workwithme.models.catalog import ApiModel

_DATETIME = TypeAdapter(datetime)


class ResponseEntry(ApiModel):
    """One stored answer: a string (TEXT/CHOICE) or list of strings (MULTICHOICE).

    `answered_at` keeps the client's exact string so a stored map reads back
    byte-for-byte; it only has to parse as an ISO-8601 timestamp.
    """

    value: Union[str, List[str]]
    answered_at: str

    @field_validator("answered_at")
    @classmethod
    def answered_at_must_be_timestamp(cls, v: str) -> str:
        try:
            _DATETIME.validate_python(v)
        except PydanticValidationError as exc:
            raise ValueError("answeredAt must be an ISO-8601 timestamp") from exc
        return v


ResponseMap = Dict[str, Dict[str, ResponseEntry]]


class Profile(ApiModel):
    id: str
    name: str
    shareable_id: str
    created_at: str
    updated_at: str
    responses: ResponseMap = Field(default_factory=dict)


class CreateProfileRequest(ApiModel):
    name: str


class UpdateProfileRequest(ApiModel):
    responses: ResponseMap


class AuthRequest(ApiModel):
    password: str


class AuthResponse(ApiModel):
    authenticated: bool
    message: str


class ErrorResponse(ApiModel):
    error: str


__all__ = [
    "ResponseEntry",
    "ResponseMap",
    "Profile",
    "CreateProfileRequest",
    "UpdateProfileRequest",
    "AuthRequest",
    "AuthResponse",
    "ErrorResponse",
]
