"""Admin credential check.

Admin routes use HTTP Basic; only the password is compared against the
configured admin secret, the username is ignored. The dependency runs before
any path or body handling in the admin handlers.
"""

from __future__ import annotations

import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from workwithme.logic.errors import AuthError

_basic = HTTPBasic(realm="Backoffice Administration", auto_error=False)


def _configured_password(request: Request) -> str:
    return request.app.state.config.admin.password


def password_matches(candidate: str | None, expected: str) -> bool:
    if not isinstance(candidate, str):
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def require_admin(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(_basic),
) -> str:
    """FastAPI dependency returning the admin principal name or raising AuthError."""
    if credentials is None:
        raise AuthError("Admin authentication required")
    if not password_matches(credentials.password, _configured_password(request)):
        raise AuthError("Invalid admin credentials")
    return "admin"


def check_admin_password(request: Request, password: str) -> None:
    if not password_matches(password, _configured_password(request)):
        raise AuthError("Invalid admin password")


__all__ = ["require_admin", "check_admin_password", "password_matches"]
