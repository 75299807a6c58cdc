from datetime import datetime, timedelta

import pytest

from config.settings import parse_duration
from models.audit_model import AuditLog
from models.session_model import UserSession
from models.user_model import User
from services.auth_service import hash_token

from conftest import PASSWORD, bearer, login


def _register(client, email="sara@example.com", role="client", **extra):
    payload = {"email": email, "password": PASSWORD, "full_name": "Sara Test", "role": role}
    payload.update(extra)
    return client.post("/api/auth/register", json=payload)


@pytest.mark.parametrize("raw, expected", [
    ("3600", timedelta(seconds=3600)),
    ("45m", timedelta(minutes=45)),
    ("24h", timedelta(hours=24)),
    ("7d", timedelta(days=7)),
])
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


def test_parse_duration_rejects_garbage():
    with pytest.raises(ValueError):
        parse_duration("tomorrow")


def test_register_creates_user_and_profile(client):
    r = _register(client, role="supplier", role_data={"company_name": "Chez Sara", "delivery_fee": 5})
    assert r.status_code == 201
    user_id = r.json()["user_id"]

    me = login(client, "sara@example.com")
    assert me.user_id == user_id
    assert me.user["role"] == "supplier"
    assert me.profile_id is not None

    profile = client.get("/api/fournisseur/profile", headers=me.headers).json()
    assert profile["company_name"] == "Chez Sara"
    assert profile["delivery_fee"] == 5.0


def test_register_duplicate_email_conflicts(client):
    assert _register(client).status_code == 201
    r = _register(client)
    assert r.status_code == 409


def test_admin_cannot_self_register(client):
    assert _register(client, role="admin").status_code == 403


def test_password_over_bcrypt_limit_is_rejected(client):
    r = client.post("/api/auth/register", json={
        "email": "long@example.com", "password": "x" * 80, "full_name": "Long Pass", "role": "client",
    })
    assert r.status_code == 400
    assert "72" in r.json()["detail"]


def test_login_wrong_password(client):
    _register(client)
    r = client.post("/api/auth/login", json={"email": "sara@example.com", "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


def test_login_unknown_email(client):
    r = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert r.status_code == 401


def test_login_records_session_and_audit(client, db):
    _register(client)
    me = login(client, "sara@example.com")

    s = db.get(UserSession, me.session_id)
    assert s.is_active
    assert s.token_hash == hash_token(me.token)
    assert s.expires_at > datetime.utcnow() + timedelta(hours=23)

    actions = [a.action for a in db.query(AuditLog).filter(AuditLog.user_id == me.user_id).order_by(AuditLog.id)]
    assert actions == ["register", "login"]


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers=bearer("not-a-jwt")).status_code == 401


def test_me_returns_current_user(client, make_user):
    c = make_user("client")
    r = client.get("/api/auth/me", headers=c.headers)
    assert r.status_code == 200
    assert r.json()["email"] == c.email


def test_verify_session_from_body(client, make_user):
    c = make_user("client")
    r = client.post("/api/auth/verify-session", json={"session_token": c.token})
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["id"] == c.user_id
    assert body["session"]["id"] == c.session_id
    assert body["session"]["is_current"] is True


def test_logout_revokes_token_immediately(client, make_user):
    c = make_user("client")
    assert client.post("/api/auth/logout", headers=c.headers).status_code == 200
    assert client.get("/api/auth/me", headers=c.headers).status_code == 401
    # the row exists but is already closed
    assert client.post("/api/auth/logout", headers=c.headers).status_code == 404


def test_expired_session_is_rejected(client, make_user, db):
    c = make_user("client")
    db.query(UserSession).filter(UserSession.id == c.session_id).update(
        {UserSession.expires_at: datetime.utcnow() - timedelta(minutes=1)}
    )
    db.commit()
    assert client.get("/api/auth/me", headers=c.headers).status_code == 401


def test_extend_rotates_token(client, make_user, db):
    c = make_user("client")
    before = db.get(UserSession, c.session_id).expires_at

    r = client.post("/api/sessions/extend", headers=c.headers)
    assert r.status_code == 200
    new_token = r.json()["token"]
    assert new_token != c.token

    db.expire_all()
    assert db.get(UserSession, c.session_id).expires_at >= before
    assert client.get("/api/auth/me", headers=bearer(new_token)).status_code == 200
    assert client.get("/api/auth/me", headers=c.headers).status_code == 401


def test_list_and_revoke_sessions(client, make_user):
    first = make_user("client", email="multi@example.com")
    second = login(client, "multi@example.com")

    r = client.get("/api/sessions", headers=second.headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert r.json()["total"] == 2
    current = [s for s in data if s["is_current"]]
    assert [s["id"] for s in current] == [second.session_id]
    assert all(s["token_preview"].endswith("...") for s in data)

    r = client.patch(f"/api/sessions/{first.session_id}/logout", headers=second.headers)
    assert r.status_code == 200
    assert client.get("/api/auth/me", headers=first.headers).status_code == 401
    assert client.get("/api/auth/me", headers=second.headers).status_code == 200


def test_cannot_revoke_someone_elses_session(client, make_user):
    a = make_user("client")
    b = make_user("client")
    assert client.patch(f"/api/sessions/{a.session_id}/logout", headers=b.headers).status_code == 404


def test_logout_all(client, make_user):
    first = make_user("courier", email="busy@example.com")
    second = login(client, "busy@example.com")
    r = client.post("/api/sessions/logout-all", headers=second.headers)
    assert r.status_code == 200
    assert r.json()["count"] == 2
    assert client.get("/api/auth/me", headers=first.headers).status_code == 401
    assert client.get("/api/auth/me", headers=second.headers).status_code == 401


def test_session_cleanup(client, make_user, db):
    admin = make_user("admin")
    stale = make_user("client", email="stale@example.com")
    ancient = login(client, "stale@example.com")

    now = datetime.utcnow()
    db.query(UserSession).filter(UserSession.id == stale.session_id).update(
        {UserSession.expires_at: now - timedelta(hours=1)}
    )
    db.query(UserSession).filter(UserSession.id == ancient.session_id).update(
        {UserSession.expires_at: now - timedelta(days=45), UserSession.is_active: False}
    )
    db.commit()

    r = client.post("/api/admin/sessions/cleanup", headers=admin.headers)
    assert r.status_code == 200
    assert r.json()["deactivated"] == 1
    assert r.json()["deleted"] == 1

    db.expire_all()
    assert db.get(UserSession, ancient.session_id) is None
    assert db.get(UserSession, stale.session_id).is_active is False


def test_suspended_user_cannot_login(client, make_user):
    admin = make_user("admin")
    c = make_user("client")
    r = client.patch(f"/api/admin/utilisateurs/{c.user_id}/statut", json={"status": "suspended"}, headers=admin.headers)
    assert r.status_code == 200
    assert client.get("/api/auth/me", headers=c.headers).status_code == 401

    r = client.post("/api/auth/login", json={"email": c.email, "password": PASSWORD})
    assert r.status_code == 403


def test_open_session_of_inactive_user_is_unauthorized(client, make_user, db):
    c = make_user("client")
    user = db.get(User, c.user_id)
    user.status = "inactive"
    db.commit()

    r = client.get("/api/auth/me", headers=c.headers)
    assert r.status_code == 401
    assert r.json()["detail"] == "Account is inactive"
