"""Category data access helpers.

Keeps SQL out of the services and route handlers. Every function takes the
caller's connection so services decide transaction boundaries.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from workwithme.models.catalog import Category

_COLUMNS = "id, name, sort_order, active, created_at, updated_at"


def _to_category(row: Any) -> Category:
    m = row._mapping
    return Category(
        id=str(m["id"]),
        name=str(m["name"]),
        order=int(m["sort_order"]),
        active=bool(m["active"]),
        created_at=str(m["created_at"]),
        updated_at=str(m["updated_at"]),
    )


def fetch_category(conn: Connection, category_id: str) -> Category | None:
    row = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM category WHERE id = :cid"),
        {"cid": category_id},
    ).fetchone()
    return _to_category(row) if row else None


def list_categories(conn: Connection, *, include_inactive: bool) -> list[Category]:
    where = "" if include_inactive else "WHERE active = :active"
    rows = conn.execute(
        sql_text(f"SELECT {_COLUMNS} FROM category {where} ORDER BY sort_order, id"),
        {} if include_inactive else {"active": True},
    ).fetchall()
    return [_to_category(r) for r in rows]


def find_active_by_name(conn: Connection, name: str, *, exclude_id: str | None = None) -> Category | None:
    params: dict = {"name": name, "active": True}
    sql = f"SELECT {_COLUMNS} FROM category WHERE name = :name AND active = :active"
    if exclude_id is not None:
        sql += " AND id <> :exclude"
        params["exclude"] = exclude_id
    row = conn.execute(sql_text(sql), params).fetchone()
    return _to_category(row) if row else None


def count_categories(conn: Connection) -> int:
    row = conn.execute(sql_text("SELECT COUNT(*) FROM category")).fetchone()
    return int(row[0]) if row and row[0] is not None else 0


def insert_category(conn: Connection, category: Category) -> None:
    conn.execute(
        sql_text(
            """
            INSERT INTO category (id, name, sort_order, active, created_at, updated_at)
            VALUES (:id, :name, :ord, :active, :created, :updated)
            """
        ),
        {
            "id": category.id,
            "name": category.name,
            "ord": category.order,
            "active": category.active,
            "created": category.created_at,
            "updated": category.updated_at,
        },
    )


def save_category(conn: Connection, category: Category) -> None:
    """Write back name, order and updated_at for an existing row."""
    conn.execute(
        sql_text("UPDATE category SET name = :name, sort_order = :ord, updated_at = :updated WHERE id = :id"),
        {"name": category.name, "ord": category.order, "updated": category.updated_at, "id": category.id},
    )


def deactivate_category(conn: Connection, category_id: str, updated_at: str) -> None:
    conn.execute(
        sql_text("UPDATE category SET active = :inactive, updated_at = :updated WHERE id = :id"),
        {"inactive": False, "updated": updated_at, "id": category_id},
    )


__all__ = [
    "fetch_category",
    "list_categories",
    "find_active_by_name",
    "count_categories",
    "insert_category",
    "save_category",
    "deactivate_category",
]
