"""Functional tests for profile creation, retrieval, response replacement and sharing."""

from __future__ import annotations

import uuid

import pytest

UNKNOWN_ID = "0123456789abcdef01234567"
ANSWERED_AT = "2024-05-01T09:30:00Z"


@pytest.fixture
def catalog(make_category, make_question):
    comms = make_category("Communication", 0)
    style = make_category("Work Style", 1)
    return {
        "comms": comms,
        "style": style,
        "text": make_question(comms["id"], "How do you prefer feedback?"),
        "choice": make_question(comms["id"], "Best channel?", 1, type="CHOICE", choices=["Slack", "Email"]),
        "multi": make_question(style["id"], "When are you sharpest?", type="MULTICHOICE", choices=["AM", "PM"]),
    }


def _entry(value, answered_at: str = ANSWERED_AT) -> dict:
    return {"value": value, "answeredAt": answered_at}


def test_create_profile(client):
    resp = client.post("/api/profiles", json={"name": "  Ada  "})

    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Ada"
    assert body["responses"] == {}
    assert len(body["id"]) == 24
    assert uuid.UUID(body["shareableId"]).version == 4
    assert body["createdAt"] == body["updatedAt"]


def test_create_profile_requires_name(client):
    blank = client.post("/api/profiles", json={"name": "   "})
    assert blank.status_code == 400
    assert blank.json() == {"error": "Name cannot be empty"}

    missing = client.post("/api/profiles", json={})
    assert missing.status_code == 400
    assert missing.json()["error"].startswith("Invalid request:")


def test_shareable_ids_are_unique(client):
    ids = {client.post("/api/profiles", json={"name": f"p{i}"}).json()["shareableId"] for i in range(5)}
    assert len(ids) == 5


def test_get_profile_by_id_and_shareable_id(client):
    created = client.post("/api/profiles", json={"name": "Grace"}).json()

    by_id = client.get(f"/api/profiles/{created['id']}")
    shared = client.get(f"/api/profiles/share/{created['shareableId']}")

    assert by_id.status_code == 200
    assert shared.status_code == 200
    assert by_id.json() == created
    assert shared.json() == created


def test_profile_lookup_errors(client):
    bad = client.get("/api/profiles/not-an-id")
    assert bad.status_code == 400
    assert bad.json() == {"error": "Invalid profile ID format"}

    missing = client.get(f"/api/profiles/{UNKNOWN_ID}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Profile not found"}

    unshared = client.get(f"/api/profiles/share/{uuid.uuid4()}")
    assert unshared.status_code == 404
    assert unshared.json() == {"error": "Shared profile not found"}


def test_put_replaces_responses_and_reads_back_exactly(client, catalog):
    profile = client.post("/api/profiles", json={"name": "Linus"}).json()
    responses = {
        catalog["comms"]["id"]: {
            catalog["text"]["id"]: _entry("Direct and written", "2024-05-01T09:30:00.123456Z"),
            catalog["choice"]["id"]: _entry("Slack"),
        },
        catalog["style"]["id"]: {catalog["multi"]["id"]: _entry(["AM", "PM"], "2024-05-01T09:31:00+00:00")},
    }

    resp = client.put(f"/api/profiles/{profile['id']}", json={"responses": responses})

    assert resp.status_code == 200
    body = resp.json()
    assert body["responses"] == responses
    assert body["updatedAt"] > profile["updatedAt"]
    assert body["createdAt"] == profile["createdAt"]
    assert body["shareableId"] == profile["shareableId"]
    assert client.get(f"/api/profiles/{profile['id']}").json()["responses"] == responses
    assert client.get(f"/api/profiles/share/{profile['shareableId']}").json()["responses"] == responses


def test_put_is_full_replacement_not_merge(client, catalog):
    profile = client.post("/api/profiles", json={"name": "Merge"}).json()
    comms, style = catalog["comms"]["id"], catalog["style"]["id"]
    client.put(
        f"/api/profiles/{profile['id']}",
        json={"responses": {comms: {catalog["text"]["id"]: _entry("first")}}},
    )

    second = {style: {catalog["multi"]["id"]: _entry(["AM"])}}
    resp = client.put(f"/api/profiles/{profile['id']}", json={"responses": second})

    assert resp.json()["responses"] == second


def test_put_empty_map_clears_responses(client, catalog):
    profile = client.post("/api/profiles", json={"name": "Clear"}).json()
    client.put(
        f"/api/profiles/{profile['id']}",
        json={"responses": {catalog["comms"]["id"]: {catalog["text"]["id"]: _entry("x")}}},
    )
    resp = client.put(f"/api/profiles/{profile['id']}", json={"responses": {}})
    assert resp.status_code == 200
    assert resp.json()["responses"] == {}


def test_put_rejects_unknown_pairs(client, catalog):
    profile = client.post("/api/profiles", json={"name": "Strict"}).json()
    # question exists, but in the other category
    wrong_category = {catalog["style"]["id"]: {catalog["text"]["id"]: _entry("x")}}

    resp = client.put(f"/api/profiles/{profile['id']}", json={"responses": wrong_category})

    assert resp.status_code == 400
    assert resp.json() == {
        "error": f"Question '{catalog['text']['id']}' not found in category '{catalog['style']['id']}'"
    }
    assert client.get(f"/api/profiles/{profile['id']}").json()["responses"] == {}


def test_put_rejects_answers_to_deleted_questions(client, catalog, admin_auth):
    profile = client.post("/api/profiles", json={"name": "Late"}).json()
    client.delete(f"/api/admin/questions/{catalog['text']['id']}", auth=admin_auth)

    resp = client.put(
        f"/api/profiles/{profile['id']}",
        json={"responses": {catalog["comms"]["id"]: {catalog["text"]["id"]: _entry("x")}}},
    )
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "key, value, message",
    [
        ("text", ["list"], "expects a text answer"),
        ("choice", "Fax", "is not a valid choice"),
        ("choice", ["Slack"], "expects a single choice"),
        ("multi", "AM", "expects a list of choices"),
        ("multi", ["AM", "Noon"], "is not a valid choice"),
    ],
)
def test_put_rejects_values_that_do_not_fit_the_question(client, catalog, key, value, message):
    profile = client.post("/api/profiles", json={"name": "Typed"}).json()
    question = catalog[key]
    responses = {question["categoryId"]: {question["id"]: _entry(value)}}

    resp = client.put(f"/api/profiles/{profile['id']}", json={"responses": responses})

    assert resp.status_code == 400
    assert message in resp.json()["error"]


def test_put_rejects_bad_answered_at(client, catalog):
    profile = client.post("/api/profiles", json={"name": "Clock"}).json()
    responses = {catalog["comms"]["id"]: {catalog["text"]["id"]: _entry("x", "yesterday")}}
    resp = client.put(f"/api/profiles/{profile['id']}", json={"responses": responses})
    assert resp.status_code == 400
    assert "answeredAt" in resp.json()["error"]


def test_soft_deleting_a_question_keeps_stored_answers(client, catalog, admin_auth):
    profile = client.post("/api/profiles", json={"name": "Keep"}).json()
    responses = {catalog["comms"]["id"]: {catalog["text"]["id"]: _entry("kept")}}
    client.put(f"/api/profiles/{profile['id']}", json={"responses": responses})

    client.delete(f"/api/admin/categories/{catalog['comms']['id']}?cascade=true", auth=admin_auth)

    assert client.get(f"/api/profiles/{profile['id']}").json()["responses"] == responses


def test_put_unknown_profile(client):
    resp = client.put(f"/api/profiles/{UNKNOWN_ID}", json={"responses": {}})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Profile not found"}

    bad = client.put("/api/profiles/123", json={"responses": {}})
    assert bad.status_code == 400
