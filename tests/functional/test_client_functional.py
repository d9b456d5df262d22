"""Functional tests for the client package run against the in-process app.

`TestClient` is an `httpx.Client`, so it is handed to `ApiClient` directly and
the wizard and admin session exercise the real routes and store.
"""

from __future__ import annotations

import httpx
import pytest

from workwithme.client.admin import AdminSession
from workwithme.client.api import ApiClient, ApiError
from workwithme.client.terminal import render_shared_profile, run_questionnaire
from workwithme.client.wizard import QuestionnaireWizard, WizardStep, view_shared_profile
from workwithme.logic.errors import ValidationError


@pytest.fixture
def api(client):
    return ApiClient(client=client)


@pytest.fixture
def seeded(make_category, make_question):
    first = make_category("Communication", 0)
    second = make_category("Work Style", 1)
    return {
        "first": first,
        "second": second,
        "feedback": make_question(first["id"], "How do you like feedback?"),
        "channel": make_question(first["id"], "Best channel?", 1, type="CHOICE", choices=["Slack", "Email"]),
        "hours": make_question(second["id"], "Focus hours?", type="MULTICHOICE", choices=["AM", "PM"]),
    }


# ApiClient


def test_api_client_raises_api_error_with_server_message(api):
    with pytest.raises(ApiError) as excinfo:
        api.get_profile("0123456789abcdef01234567")
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Profile not found"


def test_api_client_wraps_transport_failures():
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx.MockTransport(_refuse)
    api = ApiClient(client=httpx.Client(transport=transport, base_url="http://api.test"))

    with pytest.raises(ApiError) as excinfo:
        api.health()
    assert excinfo.value.status_code == 0


def test_api_client_falls_back_to_http_reason_without_error_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
    api = ApiClient(client=httpx.Client(transport=transport, base_url="http://api.test"))

    with pytest.raises(ApiError) as excinfo:
        api.get_questions()
    assert excinfo.value.message == "HTTP 502: Bad Gateway"


def test_api_client_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("WORKWITHME_API_URL", "http://api.example:9000/")
    with ApiClient() as api:
        assert api.base_url == "http://api.example:9000"


# Wizard


def test_wizard_walks_categories_and_submits_once(api, seeded, client):
    wizard = QuestionnaireWizard(api, frontend_base_url="http://frontend.test/")

    screen = wizard.start("Ada")
    assert wizard.step == WizardStep.CATEGORY
    assert screen.category.id == seeded["first"]["id"]
    assert [q.id for q in screen.questions] == [seeded["feedback"]["id"], seeded["channel"]["id"]]
    assert wizard.progress == (1, 2)

    wizard.answer(seeded["feedback"]["id"], "Straight talk")
    wizard.answer(seeded["channel"]["id"], "Slack")
    screen = wizard.next()
    assert screen.category.id == seeded["second"]["id"]

    # nothing is saved until the final step
    stored = client.get(f"/api/profiles/{wizard.profile.id}").json()
    assert stored["responses"] == {}

    wizard.answer(seeded["hours"]["id"], ["AM"])
    assert wizard.next() is None
    assert wizard.step == WizardStep.SUMMARY

    stored = client.get(f"/api/profiles/{wizard.profile.id}").json()["responses"]
    assert stored[seeded["first"]["id"]][seeded["channel"]["id"]]["value"] == "Slack"
    assert stored[seeded["second"]["id"]][seeded["hours"]["id"]]["value"] == ["AM"]
    assert wizard.share_url == f"http://frontend.test/share/{wizard.profile.shareable_id}"


def test_wizard_back_keeps_answers_and_blank_clears(api, seeded):
    wizard = QuestionnaireWizard(api)
    wizard.start("Grace")
    wizard.answer(seeded["feedback"]["id"], "Kindly")
    wizard.answer(seeded["channel"]["id"], "Email")
    wizard.next()

    screen = wizard.back()
    assert screen.category.id == seeded["first"]["id"]
    assert wizard.current_answers() == {seeded["feedback"]["id"]: "Kindly", seeded["channel"]["id"]: "Email"}

    wizard.answer(seeded["channel"]["id"], "")
    assert seeded["channel"]["id"] not in wizard.current_answers()


def test_wizard_rejects_invalid_local_answers(api, seeded):
    wizard = QuestionnaireWizard(api)
    wizard.start("Linus")

    with pytest.raises(ValidationError):
        wizard.answer(seeded["channel"]["id"], "Carrier pigeon")
    with pytest.raises(ValidationError):
        wizard.answer(seeded["hours"]["id"], ["AM"])


def test_wizard_requires_a_name(api, seeded):
    wizard = QuestionnaireWizard(api)
    with pytest.raises(ValidationError):
        wizard.start("   ")
    assert wizard.step == WizardStep.NAME_ENTRY


def test_wizard_resume_prefills_and_replaces(api, seeded, client):
    wizard = QuestionnaireWizard(api)
    wizard.start("Edit me")
    wizard.answer(seeded["feedback"]["id"], "Old answer")
    wizard.next()
    wizard.next()

    editing = QuestionnaireWizard(api)
    editing.resume(wizard.profile.id)
    assert editing.current_answers() == {seeded["feedback"]["id"]: "Old answer"}
    editing.answer(seeded["feedback"]["id"], "New answer")
    editing.next()
    editing.next()

    stored = client.get(f"/api/profiles/{wizard.profile.id}").json()["responses"]
    assert stored[seeded["first"]["id"]][seeded["feedback"]["id"]]["value"] == "New answer"


def test_wizard_resume_drops_answers_to_deleted_questions(api, seeded, client, admin_auth):
    wizard = QuestionnaireWizard(api)
    wizard.start("Stale")
    wizard.answer(seeded["feedback"]["id"], "Keep me")
    wizard.answer(seeded["channel"]["id"], "Email")
    wizard.next()
    wizard.next()
    client.delete(f"/api/admin/questions/{seeded['channel']['id']}", auth=admin_auth)

    editing = QuestionnaireWizard(api)
    editing.resume(wizard.profile.id)
    assert editing.current_answers() == {seeded["feedback"]["id"]: "Keep me"}
    editing.answer(seeded["feedback"]["id"], "Edited")
    editing.next()
    assert editing.next() is None

    assert editing.step == WizardStep.SUMMARY
    stored = client.get(f"/api/profiles/{wizard.profile.id}").json()["responses"]
    assert list(stored) == [seeded["first"]["id"]]
    assert list(stored[seeded["first"]["id"]]) == [seeded["feedback"]["id"]]
    assert stored[seeded["first"]["id"]][seeded["feedback"]["id"]]["value"] == "Edited"


def test_wizard_cannot_submit_or_share_before_a_profile_exists(api):
    wizard = QuestionnaireWizard(api)

    with pytest.raises(RuntimeError, match="No profile yet"):
        wizard._submit()
    with pytest.raises(RuntimeError, match="No profile yet"):
        wizard.share_url
    assert wizard.step == WizardStep.NAME_ENTRY


def test_wizard_with_empty_catalog_goes_straight_to_summary(api):
    wizard = QuestionnaireWizard(api)
    assert wizard.start("Nobody") is None
    assert wizard.step == WizardStep.SUMMARY


def test_view_shared_profile_groups_by_category(api, seeded):
    wizard = QuestionnaireWizard(api)
    wizard.start("Shared")
    wizard.answer(seeded["channel"]["id"], "Slack")
    wizard.answer(seeded["feedback"]["id"], "Often")
    wizard.next()
    wizard.answer(seeded["hours"]["id"], ["PM", "AM"])
    wizard.next()

    view = view_shared_profile(api, wizard.profile.shareable_id)

    assert view.name == "Shared"
    assert [s.title for s in view.sections] == ["Communication", "Work Style"]
    assert view.sections[0].items == [("How do you like feedback?", "Often"), ("Best channel?", "Slack")]
    assert view.sections[1].items == [("Focus hours?", ["PM", "AM"])]

    lines: list[str] = []
    render_shared_profile(view, echo=lines.append)
    assert lines[0] == "How to work with Shared"
    assert "    PM, AM" in lines


def test_terminal_questionnaire_end_to_end(api, seeded):
    replies = iter(["", "Terminal Tess", "Be direct", "2", "n", "1,2", "n"])
    output: list[str] = []
    wizard = QuestionnaireWizard(api, frontend_base_url="http://frontend.test")

    url = run_questionnaire(wizard, prompt=lambda _: next(replies), echo=output.append)

    assert url == wizard.share_url
    assert "Name cannot be empty" in output
    saved = api.get_profile(wizard.profile.id).responses
    assert saved[seeded["first"]["id"]][seeded["channel"]["id"]].value == "Email"
    assert saved[seeded["second"]["id"]][seeded["hours"]["id"]].value == ["AM", "PM"]


# Admin session


def test_admin_session_login_and_manage_catalog(api):
    session = AdminSession(api)
    with pytest.raises(ApiError) as excinfo:
        session.categories()
    assert excinfo.value.status_code == 401

    with pytest.raises(ApiError):
        session.login("wrong")
    assert not session.authenticated

    session.login("test-secret")
    category = session.create_category("Admin Made", 3)
    renamed = session.rename_category(category.id, "Admin Renamed")
    assert renamed.name == "Admin Renamed"

    first = session.create_question("First?", category.id)
    second = session.create_question("Second?", category.id, type="CHOICE", choices=["y", "n"])
    assert (first.order, second.order) == (0, 1)

    with pytest.raises(ApiError) as conflict:
        session.delete_category(category.id)
    assert conflict.value.status_code == 409
    session.delete_category(category.id, cascade=True)
    assert [c.active for c in session.categories()] == [False]

    session.logout()
    assert not session.authenticated


def test_admin_session_reorders_questions(api, seeded):
    session = AdminSession(api)
    session.login("test-secret")
    cid = seeded["first"]["id"]

    reordered = session.reorder_questions(cid, [seeded["channel"]["id"], seeded["feedback"]["id"]])

    assert [(q.id, q.order) for q in reordered] == [(seeded["channel"]["id"], 0), (seeded["feedback"]["id"], 1)]
    public = [q.id for q in api.get_questions() if q.category_id == cid]
    assert public == [seeded["channel"]["id"], seeded["feedback"]["id"]]

    with pytest.raises(ApiError):
        session.reorder_questions(cid, [seeded["hours"]["id"]])
