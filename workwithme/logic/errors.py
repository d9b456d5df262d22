"""Domain error taxonomy for catalog and profile services.

Services raise these; the HTTP layer alone decides which status each maps to
(see `workwithme.http.errors`).
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for expected domain failures carrying a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    pass


class InvalidCategoryError(ValidationError):
    """Raised when a question references a category that does not exist."""


class NotFoundError(CatalogError):
    pass


class ConflictError(CatalogError):
    pass


class AuthError(CatalogError):
    pass


__all__ = [
    "CatalogError",
    "ValidationError",
    "InvalidCategoryError",
    "NotFoundError",
    "ConflictError",
    "AuthError",
]
