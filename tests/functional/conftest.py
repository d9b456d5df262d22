"""Functional test bootstrap.

Points the app at a file-backed SQLite database under tmp/ before anything
builds an engine, applies the packaged migrations once per session, and
empties the tables before every test so cases stay independent.
"""

from __future__ import annotations

import os
import pathlib

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["DATABASE_URL"] = os.environ["TEST_DATABASE_URL"]
os.environ["AUTO_APPLY_MIGRATIONS"] = "1"
os.environ["SEED_ON_STARTUP"] = "0"
os.environ["ADMIN_PASSWORD"] = "test-secret"
os.environ["FRONTEND_BASE_URL"] = "http://frontend.test"

ADMIN_AUTH = ("admin", "test-secret")


@pytest.fixture(scope="session")
def app():
    from workwithme.main import create_app

    return create_app()


@pytest.fixture(scope="session")
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clean_store(request):
    if request.node.get_closest_marker("no_store"):
        yield
        return
    request.getfixturevalue("app")
    from sqlalchemy import text as sql_text

    from workwithme.db.base import get_engine

    with get_engine(os.environ["DATABASE_URL"]).begin() as conn:
        for table in ("profile", "question", "category"):
            conn.execute(sql_text(f"DELETE FROM {table}"))
    yield


@pytest.fixture
def admin_auth():
    return ADMIN_AUTH


@pytest.fixture
def make_category(client):
    def _make(name: str, order: int = 0) -> dict:
        resp = client.post("/api/admin/categories", json={"name": name, "order": order}, auth=ADMIN_AUTH)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_question(client):
    def _make(category_id: str, text: str, order: int = 0, **extra) -> dict:
        body = {"text": text, "categoryId": category_id, "order": order, **extra}
        resp = client.post("/api/admin/questions", json=body, auth=ADMIN_AUTH)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
