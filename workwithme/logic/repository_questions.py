"""Question data access helpers.

Choices are stored as a JSON array in a TEXT column. Functions take the
caller's connection; the cascade path in the category service relies on
`deactivate_questions_in_category` sharing its transaction.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from workwithme.models.catalog import Question

_COLUMNS = (
    "q.id, q.category_id, q.question_text, q.question_type, q.choices, q.placeholder, "
    "q.sort_order, q.active, q.created_at, q.updated_at"
)


def _to_question(row: Any) -> Question:
    m = row._mapping
    raw_choices = m["choices"]
    return Question(
        id=str(m["id"]),
        category_id=str(m["category_id"]),
        text=str(m["question_text"]),
        type=str(m["question_type"]),
        choices=json.loads(raw_choices) if raw_choices else None,
        placeholder=m["placeholder"],
        order=int(m["sort_order"]),
        active=bool(m["active"]),
        created_at=str(m["created_at"]),
        updated_at=str(m["updated_at"]),
    )


def _params(question: Question) -> dict:
    return {
        "id": question.id,
        "cid": question.category_id,
        "qtext": question.text,
        "qtype": question.type,
        "choices": json.dumps(question.choices) if question.choices is not None else None,
        "placeholder": question.placeholder,
        "ord": question.order,
        "active": question.active,
        "created": question.created_at,
        "updated": question.updated_at,
    }


def fetch_question(conn: Connection, question_id: str) -> Question | None:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM question q WHERE q.id = :qid"),
        {"qid": question_id},
    ).fetchone()
    return _to_question(row) if row else None


def list_questions(
    conn: Connection,
    *,
    category_id: str | None = None,
    include_inactive: bool = True,
) -> list[Question]:
    """List questions sorted by (category_id, sort_order, id).

    The active view also drops questions whose category is inactive.
    """
    clauses: list[str] = []
    params: dict = {}
    if category_id is not None:
        clauses.append("q.category_id = :cid")
        params["cid"] = category_id
    if not include_inactive:
        clauses.append("q.active = :active AND c.active = :active")
        params["active"] = True
    where = ("WHERE " + " AND ".join(clauses)) if clauses else ""
    rows = conn.execute(
        sql_text(
            f"SELECT {_COLUMNS} FROM question q JOIN category c ON c.id = q.category_id "
            f"{where} ORDER BY q.category_id, q.sort_order, q.id"
        ),
        params,
    ).fetchall()
    return [_to_question(r) for r in rows]


def find_active_in_category(conn: Connection, category_id: str, question_id: str) -> Question | None:
    row = conn.execute(
        sql_text(
            f"SELECT {_COLUMNS} FROM question q "
            "WHERE q.id = :qid AND q.category_id = :cid AND q.active = :active"
        ),
        {"qid": question_id, "cid": category_id, "active": True},
    ).fetchone()
    return _to_question(row) if row else None


def count_active_questions(conn: Connection, category_id: str) -> int:
    row = conn.execute(
        sql_text("SELECT COUNT(*) FROM question WHERE category_id = :cid AND active = :active"),
        {"cid": category_id, "active": True},
    ).fetchone()
    return int(row[0]) if row and row[0] is not None else 0


def insert_question(conn: Connection, question: Question) -> None:
    conn.execute(
        sql_text(
            """
            INSERT INTO question (
                id, category_id, question_text, question_type, choices, placeholder,
                sort_order, active, created_at, updated_at
            )
            VALUES (:id, :cid, :qtext, :qtype, :choices, :placeholder, :ord, :active, :created, :updated)
            """
        ),
        _params(question),
    )


def save_question(conn: Connection, question: Question) -> None:
    conn.execute(
        sql_text(
            """
            UPDATE question
            SET category_id = :cid, question_text = :qtext, question_type = :qtype,
                choices = :choices, placeholder = :placeholder, sort_order = :ord,
                updated_at = :updated
            WHERE id = :id
            """
        ),
        _params(question),
    )


def deactivate_question(conn: Connection, question_id: str, updated_at: str) -> None:
    conn.execute(
        sql_text("UPDATE question SET active = :inactive, updated_at = :updated WHERE id = :id"),
        {"inactive": False, "updated": updated_at, "id": question_id},
    )


def deactivate_questions_in_category(conn: Connection, category_id: str, updated_at: str) -> int:
    result = conn.execute(
        sql_text(
            "UPDATE question SET active = :inactive, updated_at = :updated "
            "WHERE category_id = :cid AND active = :active"
        ),
        {"inactive": False, "updated": updated_at, "cid": category_id, "active": True},
    )
    return int(result.rowcount or 0)


__all__ = [
    "fetch_question",
    "list_questions",
    "find_active_in_category",
    "count_active_questions",
    "insert_question",
    "save_question",
    "deactivate_question",
    "deactivate_questions_in_category",
]
