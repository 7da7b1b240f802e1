from auth.models import User, UserRole, SubscriptionTier
from auth.services import AuthService
from config import settings


def test_first_login_provisions_user(client, database):
    response = client.post("/auth/login", json={"email": "new@example.com", "password": "pw", "name": "New"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert settings.COOKIE_NAME in response.cookies

    with database.session() as db:
        user = db.query(User).filter(User.email == "new@example.com").one()
        assert user.role == UserRole.user
        assert user.subscription_tier == SubscriptionTier.free
        assert user.password_hash != "pw"


def test_wrong_password_is_rejected(client, login):
    login(email="bob@example.com", password="right")
    response = client.post("/auth/login", json={"email": "bob@example.com", "password": "wrong"})
    assert response.status_code == 401


def test_invalid_email_is_rejected(client):
    response = client.post("/auth/login", json={"email": "not-an-email", "password": "pw"})
    assert response.status_code == 422


def test_me_returns_camel_case_user(client, login):
    headers = login(name="Alice")
    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "alice@example.com"
    assert body["name"] == "Alice"
    assert body["subscriptionTier"] == "free"
    assert "passwordHash" not in body


def test_me_without_token_is_null(client):
    response = client.get("/auth/me")
    assert response.status_code == 200
    assert response.json() is None


def test_cookie_authenticates(client):
    client.post("/auth/login", json={"email": "carol@example.com", "password": "pw"})
    response = client.get("/auth/me")
    assert response.json()["email"] == "carol@example.com"


def test_logout_clears_cookie(client):
    client.post("/auth/login", json={"email": "carol@example.com", "password": "pw"})
    response = client.post("/auth/logout")
    assert response.json() == {"success": True}
    assert client.get("/auth/me").json() is None


def test_protected_route_requires_token(client):
    assert client.get("/browse/sessions").status_code == 401


def test_garbage_token_is_rejected(client):
    response = client.get("/browse/sessions", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    ghost = User(id="ghost", email="ghost@example.com", role=UserRole.user, subscription_tier=SubscriptionTier.free)
    headers = {"Authorization": f"Bearer {AuthService.create_access_token(ghost)}"}
    assert client.get("/browse/sessions", headers=headers).status_code == 401


def test_owner_email_becomes_admin(client, database, login, monkeypatch):
    monkeypatch.setattr(settings, "OWNER_EMAIL", "owner@example.com")
    login(email="owner@example.com")
    with database.session() as db:
        assert AuthService.get_user_by_email("owner@example.com", db).role == UserRole.admin


def test_claims_carry_role_and_tier():
    user = User(id="u1", email="u1@example.com", role=UserRole.admin, subscription_tier=SubscriptionTier.pro)
    claims = AuthService.decode_access_token(AuthService.create_access_token(user))
    restored = AuthService.user_from_claims(claims)
    assert restored.id == "u1"
    assert restored.role == UserRole.admin
    assert restored.subscription_tier == SubscriptionTier.pro
