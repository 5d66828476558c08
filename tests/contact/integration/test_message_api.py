"""Integration tests for the Contact API via TestClient."""

import pytest
from contact.api.routes import message_router
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt

from shared.error_handlers import register_error_handlers

SECRET = "integration-secret"


@pytest.fixture(autouse=True)
def _jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(message_router)
    register_error_handlers(app)
    return TestClient(app)


def _auth(role="admin"):
    token = jwt.encode({"sub": "admin-001", "role": role}, SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


def _send(client, **overrides):
    payload = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "subject": "Bulk order",
        "message": "Do you offer discounts for 30 kits?",
    }
    payload.update(overrides)
    response = client.post("/messages", json=payload)
    assert response.status_code == 201
    return response.json()["data"]["id"]


class TestSubmitMessageAPI:
    def test_submit_returns_201(self, client):
        response = client.post(
            "/messages",
            json={
                "name": "Grace Hopper",
                "email": "grace@example.com",
                "subject": "Bulk order",
                "message": "Do you offer discounts for 30 kits?",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"].startswith("Message sent successfully")
        assert body["data"]["status"] == "new"
        assert body["data"]["message"] == "Do you offer discounts for 30 kits?"

    def test_missing_subject_is_422(self, client):
        response = client.post(
            "/messages",
            json={"name": "Grace", "email": "grace@example.com", "message": "Hi"},
        )
        assert response.status_code == 422

    def test_invalid_email_is_400(self, client):
        response = client.post(
            "/messages",
            json={"name": "Grace", "email": "grace", "subject": "Hi", "message": "Hello"},
        )
        assert response.status_code == 400


class TestMessageTriageAPI:
    def test_list_requires_moderator(self, client):
        _send(client)
        assert client.get("/messages").status_code == 403
        assert client.get("/messages", headers=_auth(role="customer")).status_code == 403

    def test_list_includes_status_counts(self, client):
        _send(client)
        second = _send(client, subject="Returns")
        client.put(f"/messages/{second}/archive", headers=_auth())

        body = client.get("/messages", headers=_auth()).json()

        assert body["pagination"]["total"] == 2
        assert body["status_counts"] == {"new": 1, "read": 0, "replied": 0, "archived": 1}

    def test_get_marks_read(self, client):
        message_id = _send(client)
        response = client.get(f"/messages/{message_id}", headers=_auth())
        assert response.status_code == 200
        assert response.json()["status"] == "read"

    def test_reply_with_notes(self, client):
        message_id = _send(client)
        response = client.put(f"/messages/{message_id}/reply", json={"notes": "Quoted 10%"}, headers=_auth())

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "replied"
        assert body["notes"] == "Quoted 10%"
        assert body["replied_at"] is not None

    def test_update_priority(self, client):
        message_id = _send(client)
        response = client.put(f"/messages/{message_id}", json={"priority": "urgent"}, headers=_auth())
        assert response.json()["priority"] == "urgent"

    def test_delete(self, client):
        message_id = _send(client)
        assert client.delete(f"/messages/{message_id}", headers=_auth()).status_code == 200
        assert client.get(f"/messages/{message_id}", headers=_auth()).status_code == 404
