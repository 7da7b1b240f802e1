import pytest

from browse.models import BrowsingSession, SessionStatus
from config import settings


@pytest.fixture
def admin(login, monkeypatch):
    monkeypatch.setattr(settings, "OWNER_EMAIL", "owner@example.com")
    return login(email="owner@example.com")


def test_non_admin_is_forbidden(client, login):
    headers = login()
    for path in ("/admin/users", "/admin/payments", "/admin/logs"):
        assert client.get(path, headers=headers).status_code == 403


def test_list_users_with_filter(client, admin, login):
    login()
    users = client.get("/admin/users", headers=admin).json()
    assert {user["email"] for user in users} == {"owner@example.com", "alice@example.com"}
    assert client.get("/admin/users", params={"subscription_tier": "pro"}, headers=admin).json() == []


def test_set_subscription_is_logged(client, admin, login):
    login()
    alice = next(u for u in client.get("/admin/users", headers=admin).json() if u["email"] == "alice@example.com")
    response = client.patch(f"/admin/users/{alice['id']}/subscription", params={"tier": "pro"}, headers=admin)
    assert response.status_code == 200
    assert response.json()["subscriptionTier"] == "pro"

    logs = client.get("/admin/logs", headers=admin).json()
    assert len(logs) == 1
    assert alice["id"] in logs[0]["action"]


def test_set_subscription_unknown_user(client, admin):
    response = client.patch("/admin/users/missing/subscription", params={"tier": "pro"}, headers=admin)
    assert response.status_code == 404


def test_terminate_session(client, database, admin, login, start_session):
    session_id = start_session(login())["sessionId"]
    response = client.post(f"/admin/sessions/{session_id}/terminate", headers=admin)
    assert response.status_code == 200
    assert response.json()["status"] == "terminated"
    with database.session() as db:
        assert db.get(BrowsingSession, session_id).status == SessionStatus.terminated
    assert "Terminated session" in client.get("/admin/logs", headers=admin).json()[0]["action"]


def test_terminate_unknown_session(client, admin):
    assert client.post("/admin/sessions/missing/terminate", headers=admin).status_code == 404


def test_list_payments_by_status(client, admin, login):
    headers = login()
    client.post("/subscription/createPayment", json={"tier": "pro", "months": 1}, headers=headers)
    assert len(client.get("/admin/payments", headers=admin).json()) == 1
    assert client.get("/admin/payments", params={"status": "completed"}, headers=admin).json() == []
