"""Lightweight SQL migrations runner.

Applies the packaged `migrations/*.sql` files in lexical order and records
each applied filename in a `schema_migration` table so a file is never run
twice against the same database. Statements are split on ';' because the
SQLite DB-API refuses multi-statement execute() calls.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine

from workwithme.logic.ids import utc_now

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_JOURNAL_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migration ("
    " filename TEXT PRIMARY KEY,"
    " applied_at TEXT NOT NULL)"
)


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _statements(sql: str) -> Iterable[str]:
    # Strip comment lines before splitting; comments may contain ";"
    body = "\n".join(ln for ln in sql.splitlines() if not ln.strip().startswith("--"))
    for chunk in body.split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def _applied(conn: Connection) -> set[str]:
    rows = conn.execute(sql_text("SELECT filename FROM schema_migration")).fetchall()
    return {str(r[0]) for r in rows}


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations and return the filenames applied in this run."""
    root = Path(migrations_dir) if migrations_dir else MIGRATIONS_DIR
    if not root.exists():
        logger.warning("migrations_dir_missing path=%s", root)
        return []

    newly_applied: list[str] = []
    with engine.begin() as conn:
        conn.exec_driver_sql(_JOURNAL_DDL)
        done = _applied(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in done:
                continue
            try:
                for stmt in _statements(sql_path.read_text(encoding="utf-8")):
                    conn.exec_driver_sql(stmt)
            except Exception:
                logger.error("migration_failed file=%s", fname, exc_info=True)
                raise
            conn.execute(
                sql_text("INSERT INTO schema_migration (filename, applied_at) VALUES (:f, :at)"),
                {"f": fname, "at": utc_now()},
            )
            newly_applied.append(fname)
            logger.info("migration_applied file=%s", fname)
    return newly_applied


__all__ = ["apply_migrations", "MIGRATIONS_DIR"]
