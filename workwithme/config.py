"""Configuration loading.

Rules:
- Primary source: `workwithme_config.json` at the project root (optional).
- Overrides: text files under `config/`, then environment variables.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("workwithme_config.json")
DEFAULT_ADMIN_PASSWORD = "change-me-in-production"
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def _truthy(text: Optional[str]) -> bool:
    return str(text or "").strip().lower() in {"1", "true", "yes", "on"}


class DatabaseConfig(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def url_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.url must be a non-empty string")
        return v.strip()


class AdminConfig(BaseModel):
    password: str = Field(min_length=1)

    @property
    def uses_default_password(self) -> bool:
        return self.password == DEFAULT_ADMIN_PASSWORD


class HttpConfig(BaseModel):
    cors_origins: List[str] = Field(default_factory=list)
    frontend_base_url: str = "http://localhost:5173"


class AppConfig(BaseModel):
    database: DatabaseConfig
    admin: AdminConfig
    http: HttpConfig
    auto_apply_migrations: bool = True
    seed_on_startup: bool = False


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def _split_origins(value: object) -> List[str]:
    """Accept a comma separated string or, from the JSON file, a list of origins."""
    items = value if isinstance(value, list) else str(value).split(",")
    return [str(o).strip() for o in items if str(o).strip()]


def _default_database_url(host: str, port: str, name: str) -> str:
    return f"postgresql+psycopg2://{host}:{port}/{name}"


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) workwithme_config.json at project root
    4) Local development defaults
    """

    base = _read_json_file(ROOT_CONFIG)

    def _lookup(path: str) -> object:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return None
            cur = cur[key]
        return cur

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur = _lookup(path)
        return str(cur) if cur is not None else default

    # Store
    host = _env("DB_HOST") or _base("database.host", "localhost")
    port = _env("DB_PORT") or _base("database.port", "5432")
    name = _env("DB_NAME") or _read_config_file("database.name") or _base("database.name", "howtoworkwithme")
    url = (
        _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.url")
        or _default_database_url(str(host), str(port), str(name))
    )

    # Admin secret
    password = _env("ADMIN_PASSWORD") or _read_config_file("admin.password") or _base("admin.password") or DEFAULT_ADMIN_PASSWORD

    # HTTP surface
    origins = _env("CORS_ORIGINS") or _read_config_file("cors.origins") or _lookup("http.cors_origins") or DEFAULT_CORS_ORIGINS
    frontend = _env("FRONTEND_BASE_URL") or _base("http.frontend_base_url", "http://localhost:5173")

    auto_migrate = _env("AUTO_APPLY_MIGRATIONS") or _base("auto_apply_migrations", "true")
    seed = _env("SEED_ON_STARTUP") or _base("seed_on_startup", "false")

    try:
        return AppConfig(
            database=DatabaseConfig(url=url),
            admin=AdminConfig(password=password),
            http=HttpConfig(
                cors_origins=_split_origins(origins),
                frontend_base_url=str(frontend).rstrip("/"),
            ),
            auto_apply_migrations=_truthy(auto_migrate),
            seed_on_startup=_truthy(seed),
        )
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "AdminConfig",
    "DatabaseConfig",
    "HttpConfig",
    "DEFAULT_ADMIN_PASSWORD",
    "load_config",
]
