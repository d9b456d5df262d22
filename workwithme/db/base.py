"""SQLAlchemy engine and transaction helpers.

The service targets PostgreSQL in production but supports SQLite for local
development and tests. No declarative models are defined here; this module
only manages connection lifecycle.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _db_url() -> str:
    return (
        os.getenv("TEST_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or "sqlite+pysqlite:///:memory:"
    )


# Module-level cached Engine so repositories share one pool
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def get_engine(url: str | None = None) -> Engine:
    """Return the shared Engine, rebuilding it only when `url` changes.

    With no argument the most recently configured URL is reused, falling back
    to the environment. SQLite in-memory URLs get a StaticPool so every
    session sees the same database.
    """
    global _ENGINE, _ENGINE_URL
    resolved_url = url or _ENGINE_URL or _db_url()

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if resolved_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in resolved_url:
                kwargs["poolclass"] = StaticPool
        if _ENGINE is not None:
            _ENGINE.dispose()
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        logger.info("engine_configured dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


@contextmanager
def transaction(operation: str) -> Iterator[Connection]:
    """Yield a connection inside one transaction, committed on clean exit.

    Store failures are logged with the operation name and re-raised; domain
    errors raised inside the block roll back without being logged here.
    """
    try:
        with get_engine().begin() as conn:
            yield conn
    except SQLAlchemyError:
        logger.error("store_operation_failed op=%s", operation, exc_info=True)
        raise


@contextmanager
def read_only(operation: str) -> Iterator[Connection]:
    try:
        with get_engine().connect() as conn:
            yield conn
    except SQLAlchemyError:
        logger.error("store_read_failed op=%s", operation, exc_info=True)
        raise


__all__ = ["get_engine", "transaction", "read_only"]
