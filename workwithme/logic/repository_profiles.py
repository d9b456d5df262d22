"""Profile data access helpers.

The `responses` map is persisted as a single JSON document per profile and
always written whole.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from workwithme.models.profile import Profile

_COLUMNS = "id, name, shareable_id, responses, created_at, updated_at"


def _to_profile(row: Any) -> Profile:
    m = row._mapping
    return Profile(
        id=str(m["id"]),
        name=str(m["name"]),
        shareable_id=str(m["shareable_id"]),
        responses=json.loads(m["responses"] or "{}"),
        created_at=str(m["created_at"]),
        updated_at=str(m["updated_at"]),
    )


def _responses_json(profile: Profile) -> str:
    dumped = {
        cat: {qid: entry.model_dump(by_alias=True) for qid, entry in answers.items()}
        for cat, answers in profile.responses.items()
    }
    return json.dumps(dumped, ensure_ascii=False, separators=(",", ":"))


def fetch_profile(conn: Connection, profile_id: str) -> Profile | None:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM profile WHERE id = :pid"),
        {"pid": profile_id},
    ).fetchone()
    return _to_profile(row) if row else None


def fetch_profile_by_shareable_id(conn: Connection, shareable_id: str) -> Profile | None:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM profile WHERE shareable_id = :sid"),
        {"sid": shareable_id},
    ).fetchone()
    return _to_profile(row) if row else None


def insert_profile(conn: Connection, profile: Profile) -> None:
    conn.execute(
        sql_text(
            """
            INSERT INTO profile (id, name, shareable_id, responses, created_at, updated_at)
            VALUES (:id, :name, :sid, :responses, :created, :updated)
            """
        ),
        {
            "id": profile.id,
            "name": profile.name,
            "sid": profile.shareable_id,
            "responses": _responses_json(profile),
            "created": profile.created_at,
            "updated": profile.updated_at,
        },
    )


def replace_responses(conn: Connection, profile: Profile) -> None:
    conn.execute(
        sql_text("UPDATE profile SET responses = :responses, updated_at = :updated WHERE id = :id"),
        {"responses": _responses_json(profile), "updated": profile.updated_at, "id": profile.id},
    )


__all__ = [
    "fetch_profile",
    "fetch_profile_by_shareable_id",
    "insert_profile",
    "replace_responses",
]
