"""Store bootstrap utilities.

Exposes engine construction, transaction helpers and the SQL migrations
runner. The DB layer does not leak ORM models into route handlers.
"""

from workwithme.db.base import get_engine, read_only, transaction
from workwithme.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "read_only",
    "transaction",
    "apply_migrations",
]
