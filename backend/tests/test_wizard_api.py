"""Wizard session API tests — session lifecycle, field updates, navigation, submit end to end."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ngc_intake.database import Base, get_db
from ngc_intake.main import app
from ngc_intake.services.wizard_service import SessionNotFound, WizardSessionStore, get_session_store

# ---------------------------------------------------------------------------
# Test database setup (file-based SQLite for compatibility)
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite:///./test_wizard_api.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


client = TestClient(app)
store = WizardSessionStore(ttl_minutes=30)


@pytest.fixture(autouse=True)
def setup_db():
    """Create tables and a clean session store before each test, drop after."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: store
    store.sessions.clear()
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_session_store, None)


ACME = {
    "name": "Acme Redo",
    "description": "Need a full site overhaul for our storefront",
    "type": "website-redesign",
    "urgency": "urgent",
    "contactEmail": "a@b.com",
}


def _start():
    resp = client.post("/wizard/sessions")
    assert resp.status_code == 201
    return resp.json()["sessionId"]


def _put(sid, field, value, **params):
    return client.put(f"/wizard/sessions/{sid}/fields/{field}", json={"value": value}, params=params)


def _fill(sid, values):
    for field, value in values.items():
        assert _put(sid, field, value).json()["valid"] is True


def _walk_to_review(sid):
    for _ in range(4):
        assert client.post(f"/wizard/sessions/{sid}/advance").json()["moved"] is True


class TestSessions:
    def test_new_session(self):
        data = client.post("/wizard/sessions").json()
        assert data["currentStep"] == 1
        assert data["totalSteps"] == 5
        assert data["progress"] == 20
        assert data["progressLabel"] == "Step 1 of 5"
        assert data["stepTitle"] == "Project Basics"
        assert data["canSubmit"] is False

    def test_localized_titles(self):
        data = client.post("/wizard/sessions", params={"locale": "sr"}).json()
        assert data["stepTitle"] == "Osnove projekta"
        assert data["progressLabel"] == "Korak 1 od 5"

    def test_unknown_session(self):
        resp = client.get("/wizard/sessions/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Your session has expired. Please start again."

    def test_expired_session_is_dropped(self):
        sid = _start()
        store.sessions[sid].last_activity = datetime.utcnow() - timedelta(minutes=31)
        assert client.get(f"/wizard/sessions/{sid}").status_code == 404
        assert sid not in store.sessions

    def test_discard(self):
        sid = _start()
        assert client.delete(f"/wizard/sessions/{sid}").status_code == 200
        assert client.delete(f"/wizard/sessions/{sid}").status_code == 404

    def test_store_purge(self):
        local = WizardSessionStore(ttl_minutes=5)
        old = local.create()
        old.last_activity = datetime.utcnow() - timedelta(minutes=10)
        fresh = local.create()
        assert old.session_id not in local.sessions
        assert local.get(fresh.session_id) is fresh
        with pytest.raises(SessionNotFound):
            local.get(old.session_id)

    def test_options(self):
        options = client.get("/wizard/options").json()
        assert options["urgency"] == ["low", "medium", "high", "urgent"]
        assert "user-authentication" in options["features"]
        assert "need-help" in options["hasContent"]

    def test_steps_listing(self):
        steps = client.get("/wizard/steps").json()
        assert [s["number"] for s in steps] == [1, 2, 3, 4, 5]
        assert steps[3]["fields"][1] == "contactEmail"
        assert steps[4]["title"] == "Review & Submit"


class TestFields:
    def test_invalid_value_reported_with_message(self):
        sid = _start()
        data = _put(sid, "contactEmail", "not-an-email").json()
        assert data["valid"] is False
        assert data["messageKey"] == "validation.invalidEmail"
        assert data["message"] == "Please enter a valid email address"
        assert data["session"]["currentStep"] == 1

    def test_length_message_params(self):
        sid = _start()
        data = _put(sid, "name", "A").json()
        assert data["message"] == "Must be at least 2 characters"

    def test_unknown_field(self):
        sid = _start()
        assert _put(sid, "shoeSize", 42).status_code == 404

    def test_live_estimate(self):
        sid = _start()
        _fill(sid, {"type": "mobile-app", "features": ["user-authentication"]})
        data = client.get(f"/wizard/sessions/{sid}/estimate").json()
        assert data["estimatedBudget"] == 48500
        assert data["complexityScore"] == 8.5


class TestNavigation:
    def test_advance_blocked_by_invalid_field(self):
        sid = _start()
        _put(sid, "description", "short")
        data = client.post(f"/wizard/sessions/{sid}/advance").json()
        assert data["moved"] is False
        assert data["session"]["currentStep"] == 1
        assert [e["field"] for e in data["session"]["errors"]] == ["description"]

    def test_retreat_keeps_values(self):
        sid = _start()
        _fill(sid, {"name": "Acme Redo"})
        client.post(f"/wizard/sessions/{sid}/advance")
        data = client.post(f"/wizard/sessions/{sid}/retreat").json()
        assert data["moved"] is True
        assert data["session"]["values"]["name"] == "Acme Redo"

    def test_jump(self):
        sid = _start()
        data = client.post(f"/wizard/sessions/{sid}/jump", json={"step": 4}).json()
        assert data["moved"] is True
        assert data["session"]["currentStep"] == 4
        assert data["session"]["progress"] == 80

    def test_jump_out_of_range(self):
        sid = _start()
        assert client.post(f"/wizard/sessions/{sid}/jump", json={"step": 6}).status_code == 422


class TestSubmit:
    def test_acme_end_to_end(self):
        sid = _start()
        _fill(sid, ACME)
        _walk_to_review(sid)

        resp = client.post(f"/wizard/sessions/{sid}/submit")
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["success"] is True
        assert body["id"]

        listed = client.get("/consultations/").json()
        assert listed["count"] == 1
        assert listed["data"][0]["id"] == body["id"]
        assert listed["data"][0]["status"] == "new"
        assert listed["data"][0]["estimatedBudget"] == 12000

        session = client.get(f"/wizard/sessions/{sid}").json()
        assert session["currentStep"] == 1
        assert session["values"] == {}

    def test_not_on_review_step(self):
        sid = _start()
        _fill(sid, ACME)
        resp = client.post(f"/wizard/sessions/{sid}/submit")
        assert resp.status_code == 409
        assert client.get("/consultations/").json()["count"] == 0

    def test_without_email_is_stored(self):
        sid = _start()
        _fill(sid, {"name": "Acme Redo"})
        _walk_to_review(sid)
        resp = client.post(f"/wizard/sessions/{sid}/submit")
        assert resp.status_code == 201, resp.text
        stored = client.get(f"/consultations/{resp.json()['id']}").json()
        assert stored["status"] == "new"
        assert stored["contactEmail"] is None

    def test_field_broken_after_reaching_review(self):
        sid = _start()
        _fill(sid, ACME)
        _walk_to_review(sid)
        _put(sid, "contactPhone", "abc")
        resp = client.post(f"/wizard/sessions/{sid}/submit")
        assert resp.status_code == 422
        assert resp.json()["detail"] == ["contactPhone"]

    def test_localized_success_message(self):
        sid = _start()
        _fill(sid, ACME)
        _walk_to_review(sid)
        body = client.post(f"/wizard/sessions/{sid}/submit", params={"locale": "sr"}).json()
        assert body["message"].startswith("Hvala!")
