"""Functional tests for the HTTP surface: health, public catalog, auth, errors, headers."""

from __future__ import annotations

from fastapi.testclient import TestClient

from workwithme.logic import questions as question_service


def test_root_and_health_are_plain_text(client):
    root = client.get("/")
    assert root.status_code == 200
    assert root.text == "How to Work With Me API - Server is running"
    assert root.headers["content-type"].startswith("text/plain")

    health = client.get("/health")
    assert health.status_code == 200
    assert health.text == "OK"


def test_public_questions_only_list_active_questions_of_active_categories(
    client, make_category, make_question, admin_auth
):
    live = make_category("Live", 0)
    retired = make_category("Retired", 1)
    keep_second = make_question(live["id"], "Second", 2)
    keep_first = make_question(live["id"], "First", 1)
    dropped = make_question(live["id"], "Dropped", 0)
    make_question(retired["id"], "Orphaned")
    client.delete(f"/api/admin/questions/{dropped['id']}", auth=admin_auth)
    client.delete(f"/api/admin/categories/{retired['id']}", params={"cascade": True}, auth=admin_auth)

    listed = client.get("/api/questions").json()

    assert [q["id"] for q in listed] == [keep_first["id"], keep_second["id"]]
    assert set(listed[0]) >= {"id", "categoryId", "text", "type", "order", "active", "createdAt", "updatedAt"}


def test_public_endpoints_are_empty_without_catalog(client):
    assert client.get("/api/questions").json() == []
    assert client.get("/api/categories").json() == []


def test_admin_auth_endpoint(client):
    ok = client.post("/api/admin/auth", json={"password": "test-secret"})
    assert ok.status_code == 200
    assert ok.json() == {"authenticated": True, "message": "Authentication successful"}

    wrong = client.post("/api/admin/auth", json={"password": "guess"})
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Invalid admin password"}


def test_admin_routes_require_basic_auth(client):
    missing = client.get("/api/admin/categories")
    assert missing.status_code == 401
    assert missing.json() == {"error": "Admin authentication required"}
    assert missing.headers["www-authenticate"].startswith("Basic")

    wrong = client.get("/api/admin/categories", auth=("admin", "nope"))
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Invalid admin credentials"}


def test_admin_username_is_ignored(client):
    resp = client.get("/api/admin/categories", auth=("anyone", "test-secret"))
    assert resp.status_code == 200


def test_auth_is_checked_before_ids_and_bodies(client):
    resp = client.put("/api/admin/categories/not-an-id", json={"order": "many"}, auth=("admin", "bad"))
    assert resp.status_code == 401

    resp = client.delete("/api/admin/questions/not-an-id")
    assert resp.status_code == 401
    assert client.get("/api/admin/questions", auth=("admin", "test-secret")).json() == []


def test_malformed_json_body_is_400(client):
    resp = client.post(
        "/api/profiles",
        content=b'{"name": ',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request: malformed JSON body"}


def test_wrongly_typed_body_field_is_400(client, admin_auth):
    resp = client.post("/api/admin/categories", json={"name": "X", "order": "first"}, auth=admin_auth)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid request: order:")


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_unexpected_failures_return_generic_500(app, monkeypatch):
    def _explode():
        raise RuntimeError("store is down: secret connection string")

    monkeypatch.setattr(question_service, "list_active_questions", _explode)
    with TestClient(app, raise_server_exceptions=False) as failing:
        resp = failing.get("/api/questions")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_request_id_is_generated_or_echoed(client):
    generated = client.get("/health")
    assert generated.headers.get("x-request-id")

    echoed = client.get("/health", headers={"X-Request-Id": "req-123"})
    assert echoed.headers["x-request-id"] == "req-123"


def test_cors_preflight_allows_frontend_origin(client):
    resp = client.options(
        "/api/profiles",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "PUT"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
