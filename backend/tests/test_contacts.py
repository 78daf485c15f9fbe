"""Contact form tests — submission, triage filters, status/notes timestamps, spam handling, users."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ngc_intake.database import Base, get_db
from ngc_intake.main import app

# ---------------------------------------------------------------------------
# Test database setup (file-based SQLite for compatibility)
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite:///./test_contacts.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


client = TestClient(app)


@pytest.fixture(autouse=True)
def setup_db():
    """Create tables before each test, drop after."""
    app.dependency_overrides[get_db] = override_get_db
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.pop(get_db, None)


CONTACT = {
    "name": "Marko Markovic",
    "email": "Marko@Example.com",
    "message": "We would like a quote for a new company website.",
    "contactType": "business",
}


def _create(**overrides):
    resp = client.post("/contacts/", json={**CONTACT, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


class TestSubmit:
    def test_defaults(self):
        cid = _create()
        data = client.get(f"/contacts/{cid}").json()
        assert data["status"] == "new"
        assert data["priority"] == "medium"
        assert data["email"] == "marko@example.com"
        assert data["contactType"] == "business"

    def test_localized_confirmation(self):
        resp = client.post("/contacts/", json=CONTACT)
        assert resp.json()["message"] == "Thanks for reaching out! We'll be in touch shortly."

    def test_message_too_short(self):
        assert client.post("/contacts/", json={**CONTACT, "message": "Hi"}).status_code == 422

    def test_bad_email(self):
        assert client.post("/contacts/", json={**CONTACT, "email": "not-an-email"}).status_code == 422

    def test_bad_phone(self):
        assert client.post("/contacts/", json={**CONTACT, "phone": "call me"}).status_code == 422

    def test_unknown_type(self):
        assert client.post("/contacts/", json={**CONTACT, "contactType": "sales"}).status_code == 422


class TestTriage:
    def test_filters(self):
        _create(contactType="support", priority="high")
        _create(contactType="support")
        _create()
        data = client.get("/contacts/", params={"contactType": "support", "priority": "high"}).json()
        assert data["count"] == 1

    def test_search(self):
        _create(message="Our support ticket about invoices is still open.")
        _create()
        assert client.get("/contacts/", params={"search": "invoice"}).json()["count"] == 1

    def test_resolved_stamps_time(self):
        cid = _create()
        data = client.patch(f"/contacts/{cid}/status", json={"status": "resolved"}).json()
        assert data["status"] == "resolved"
        assert data["resolvedAt"] is not None

    def test_call_note_stamps_last_contacted(self):
        cid = _create()
        plain = client.post(f"/contacts/{cid}/notes", json={"content": "Internal", "author": "Ana"}).json()
        assert plain["lastContactedAt"] is None
        call = client.post(
            f"/contacts/{cid}/notes",
            json={"content": "Phoned back", "author": "Ana", "type": "call"},
        ).json()
        assert call["lastContactedAt"] is not None
        assert len(call["notes"]) == 2

    def test_assign_copies_department(self):
        cid = _create()
        uid = client.post(
            "/users/", json={"name": "Ana Agent", "email": "ana@ngcstudio.com", "department": "support"}
        ).json()["id"]
        data = client.post(f"/contacts/{cid}/assign", json={"userId": uid}).json()
        assert data["assignedTo"] == uid
        assert data["department"] == "support"

    def test_soft_delete_marks_spam(self):
        cid = _create()
        client.delete(f"/contacts/{cid}")
        assert client.get(f"/contacts/{cid}").json()["status"] == "spam"

    def test_permanent_delete(self):
        cid = _create()
        client.delete(f"/contacts/{cid}", params={"permanent": True})
        assert client.get(f"/contacts/{cid}").status_code == 404
        actions = [a["action"] for a in client.get(f"/contacts/{cid}/activities").json()]
        assert actions == ["contact_deleted", "contact_created"]

    def test_stats(self):
        _create()
        _create(contactType="careers", priority="low")
        stats = client.get("/contacts/stats").json()
        assert stats["total"] == 2
        assert stats["byType"]["careers"] == 1
        assert stats["byPriority"]["low"] == 1


class TestUsers:
    def test_duplicate_email(self):
        body = {"name": "Ana Agent", "email": "ana@ngcstudio.com"}
        assert client.post("/users/", json=body).status_code == 201
        assert client.post("/users/", json=body).status_code == 409

    def test_list_by_role(self):
        client.post("/users/", json={"name": "Ana Agent", "email": "ana@ngcstudio.com"})
        client.post("/users/", json={"name": "Mila Manager", "email": "mila@ngcstudio.com", "role": "manager"})
        managers = client.get("/users/", params={"role": "manager"}).json()
        assert [u["name"] for u in managers] == ["Mila Manager"]

    def test_unknown_user(self):
        assert client.get("/users/00000000-0000-0000-0000-000000000000").status_code == 404
