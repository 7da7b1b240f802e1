"""Behaviour when no database is reachable: reads degrade, writes fail."""
import pytest
from fastapi.testclient import TestClient

from auth.models import User, UserRole, SubscriptionTier
from auth.services import AuthService
from database import Database
from main import app


@pytest.fixture
def client():
    previous = app.state.database
    app.state.database = Database(None)
    yield TestClient(app)
    app.state.database = previous


@pytest.fixture
def headers():
    user = User(id="u-1", email="alice@example.com", role=UserRole.user, subscription_tier=SubscriptionTier.free)
    return {"Authorization": f"Bearer {AuthService.create_access_token(user)}"}


@pytest.mark.parametrize("path", ["/vpn/locations", "/browse/sessions", "/subscription/payments"])
def test_list_reads_degrade_to_empty(client, headers, path):
    response = client.get(path, headers=headers)
    assert response.status_code == 200
    assert response.json() == []
    assert response.headers["X-Storage-Status"] == "unavailable"


def test_chat_messages_degrade(client, headers):
    response = client.get("/chat/messages", params={"sessionId": "s-1"}, headers=headers)
    assert response.json() == []
    assert response.headers["X-Storage-Status"] == "unavailable"


def test_stats_degrade_to_zero(client, headers):
    response = client.get("/analytics/stats", headers=headers)
    assert response.json()["totalSessions"] == 0
    assert response.headers["X-Storage-Status"] == "unavailable"


def test_settings_degrade_to_defaults(client, headers):
    response = client.get("/settings/get", headers=headers)
    assert response.json()["userId"] == "u-1"
    assert response.json()["deleteAfterMinutes"] == 30
    assert response.headers["X-Storage-Status"] == "unavailable"


def test_me_uses_token_claims(client, headers):
    assert client.get("/auth/me", headers=headers).json()["email"] == "alice@example.com"


def test_scan_still_works(client, headers):
    response = client.post("/browse/scan", json={"url": "https://bit.ly/x"}, headers=headers)
    assert response.json()["threatLevel"] == "danger"


@pytest.mark.parametrize("path, body", [
    ("/browse/start", {"url": "https://example.org"}),
    ("/browse/nuke", {"sessionId": "s-1"}),
    ("/vpn/connect", {}),
    ("/settings/update", {"blockAds": False}),
    ("/subscription/createPayment", {"tier": "pro", "months": 1}),
])
def test_writes_fail(client, headers, path, body):
    assert client.post(path, json=body, headers=headers).status_code == 503


def test_login_fails(client):
    response = client.post("/auth/login", json={"email": "alice@example.com", "password": "pw"})
    assert response.status_code == 503


def test_root_reports_storage(client):
    assert client.get("/").json()["storage"] == "unavailable"
