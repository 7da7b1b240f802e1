from datetime import timedelta

from browse.models import BrowsingSession, Threat, SessionStatus
from browse.services import BrowseService
from database import utcnow


def load(database, session_id):
    with database.session() as db:
        session = db.get(BrowsingSession, session_id)
        db.expunge(session)
        return session


def test_scan_does_not_create_session(client, database, login):
    headers = login()
    response = client.post("/browse/scan", json={"url": "https://bit.ly/abc"}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["threatLevel"] == "danger"
    assert body["threatDetails"]["confidence"] == "60%"
    with database.session() as db:
        assert db.query(BrowsingSession).count() == 0


def test_scan_safe_url(client, login):
    body = client.post("/browse/scan", json={"url": "https://example.org"}, headers=login()).json()
    assert body == {"threatLevel": "safe", "threatDetails": None}


def test_invalid_url_is_rejected(client, login):
    headers = login()
    for url in (
        "not a url",
        "example.org/path",
        "",
        "https://" + "a" * 2050,
        "http://exa mple.com/",
        "http://:80/",
        "http://@/",
        "https://a b c",
        "ftp://files.example.org/",
    ):
        assert client.post("/browse/start", json={"url": url}, headers=headers).status_code == 422


def test_start_safe_session(client, database, login, start_session):
    headers = login()
    body = start_session(headers, vpnIp="104.28.14.21", vpnLocation="New York", vpnCountry="United States")
    assert body["threatLevel"] == "safe"
    assert body["threatDetails"] is None

    session = load(database, body["sessionId"])
    assert session.status == SessionStatus.active
    assert session.vpn_ip == "104.28.14.21"
    assert session.vpn_country == "United States"
    assert session.auto_delete_at - session.started_at == timedelta(minutes=30)
    with database.session() as db:
        assert db.query(Threat).count() == 0


def test_start_dangerous_session_logs_threat(client, database, login, start_session):
    body = start_session(login(), url="https://evil.example/?x=eval(1)")
    assert body["threatLevel"] == "danger"
    assert body["threatDetails"]["type"] == "Suspicious JavaScript"
    with database.session() as db:
        threat = db.query(Threat).one()
        assert threat.session_id == body["sessionId"]
        assert threat.confidence == 92
        assert threat.blocked


def test_start_without_auto_delete(client, database, login, start_session):
    headers = login()
    client.post("/settings/update", json={"autoDeleteSessions": False}, headers=headers)
    body = start_session(headers)
    assert load(database, body["sessionId"]).auto_delete_at is None


def test_start_uses_custom_delete_window(client, database, login, start_session):
    headers = login()
    client.post("/settings/update", json={"deleteAfterMinutes": 5}, headers=headers)
    session = load(database, start_session(headers)["sessionId"])
    assert session.auto_delete_at - session.started_at == timedelta(minutes=5)


def test_sessions_listed_newest_first(client, login, start_session):
    headers = login()
    first = start_session(headers, url="https://one.example/")
    second = start_session(headers, url="https://two.example/")
    sessions = client.get("/browse/sessions", headers=headers).json()
    assert [s["id"] for s in sessions] == [second["sessionId"], first["sessionId"]]
    assert sessions[0]["status"] == "active"


def test_sessions_are_per_user(client, login, start_session):
    start_session(login())
    other = login(email="bob@example.com")
    assert client.get("/browse/sessions", headers=other).json() == []


def test_nuke_marks_session_deleted(client, database, login, start_session):
    headers = login()
    session_id = start_session(headers)["sessionId"]
    response = client.post("/browse/nuke", json={"sessionId": session_id}, headers=headers)
    assert response.json() == {"success": True}
    session = load(database, session_id)
    assert session.status == SessionStatus.deleted
    assert session.deleted_at is not None
    assert session.ended_at == session.deleted_at


def test_second_nuke_is_noop(client, database, login, start_session):
    headers = login()
    session_id = start_session(headers)["sessionId"]
    client.post("/browse/nuke", json={"sessionId": session_id}, headers=headers)
    deleted_at = load(database, session_id).deleted_at

    response = client.post("/browse/nuke", json={"sessionId": session_id}, headers=headers)
    assert response.status_code == 200
    assert load(database, session_id).deleted_at == deleted_at


def test_nuke_other_users_session_is_forbidden(client, database, login, start_session):
    session_id = start_session(login())["sessionId"]
    response = client.post("/browse/nuke", json={"sessionId": session_id}, headers=login(email="bob@example.com"))
    assert response.status_code == 403
    assert load(database, session_id).status == SessionStatus.active


def test_nuke_unknown_session(client, login):
    response = client.post("/browse/nuke", json={"sessionId": "missing"}, headers=login())
    assert response.status_code == 404


def test_end_then_nuke_keeps_completed(client, database, login, start_session):
    headers = login()
    session_id = start_session(headers)["sessionId"]
    assert client.post("/browse/end", json={"sessionId": session_id}, headers=headers).status_code == 200
    assert client.post("/browse/nuke", json={"sessionId": session_id}, headers=headers).status_code == 200
    session = load(database, session_id)
    assert session.status == SessionStatus.completed
    assert session.deleted_at is None


def test_sweep_deletes_only_expired_active_sessions(database, login, start_session):
    headers = login()
    expiring = start_session(headers)["sessionId"]
    ended = start_session(headers)["sessionId"]
    with database.session() as db:
        BrowseService._close(db.get(BrowsingSession, ended), SessionStatus.completed, db)
        assert BrowseService.sweep_expired(db, now=utcnow() + timedelta(minutes=31)) == 1

    assert load(database, expiring).status == SessionStatus.deleted
    assert load(database, ended).status == SessionStatus.completed


def test_sweep_leaves_sessions_before_deadline(database, login, start_session):
    session_id = start_session(login())["sessionId"]
    with database.session() as db:
        assert BrowseService.sweep_expired(db) == 0
    assert load(database, session_id).status == SessionStatus.active


def test_url_is_stored_as_given(client, login):
    headers = login()
    client.post("/browse/start", json={"url": "  https://Example.org?q=1  "}, headers=headers)
    assert client.get("/browse/sessions", headers=headers).json()[0]["url"] == "https://Example.org?q=1"
