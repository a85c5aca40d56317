from fastapi.testclient import TestClient
from sqlmodel import Session, select

from pdr_tracker.core.config import settings, session_token_settings
from pdr_tracker.db.models.sessions import AuthSession
from pdr_tracker.main import app
from pdr_tracker.security.tokens import create_session_token, new_jti
from tests.conftest import API, PASSWORDS, login


def test_login_returns_principal_and_sets_cookie(anon_client, users):
    res = login(anon_client, "admin", PASSWORDS["admin"])
    assert res.status_code == 200
    assert res.json() == {"id": users["admin"], "username": "admin", "role": "admin"}
    assert settings.SESSION_COOKIE_NAME in res.cookies
    assert "password" not in res.text


def test_login_with_wrong_password_is_401(anon_client, users):
    res = login(anon_client, "admin", "wrong")
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials"}


def test_login_with_unknown_user_is_401(anon_client, users):
    assert login(anon_client, "nobody", "whatever").status_code == 401


def test_login_without_fields_is_400(anon_client, users):
    res = anon_client.post(f"{API}/auth/login", json={"username": "admin"})
    assert res.status_code == 400
    assert {"field": "password", "message": "Field required"} in res.json()["errors"]


def test_current_user_requires_session(anon_client):
    res = anon_client.get(f"{API}/auth/user")
    assert res.status_code == 401
    assert res.json() == {"message": "Unauthorized"}


def test_current_user_returns_principal(superviseur_client, users):
    res = superviseur_client.get(f"{API}/auth/user")
    assert res.status_code == 200
    assert res.json() == {"id": users["superviseur1"], "username": "superviseur1", "role": "superviseur"}


def test_logout_revokes_persisted_session(admin_client, engine):
    token = admin_client.cookies.get(settings.SESSION_COOKIE_NAME)
    assert admin_client.post(f"{API}/auth/logout").status_code == 204

    with Session(engine) as s:
        rec = s.exec(select(AuthSession)).one()
        assert rec.revoked_at is not None

    # rejouer l'ancien cookie ne suffit pas : la session serveur est révoquée
    replay = TestClient(app)
    replay.cookies.set(settings.SESSION_COOKIE_NAME, token)
    assert replay.get(f"{API}/auth/user").status_code == 401


def test_logout_without_session_is_idempotent(anon_client):
    assert anon_client.post(f"{API}/auth/logout").status_code == 204


def test_tampered_cookie_is_rejected(anon_client, users):
    anon_client.cookies.set(settings.SESSION_COOKIE_NAME, "not-a-token")
    assert anon_client.get(f"{API}/auth/user").status_code == 401


def test_signed_token_without_persisted_session_is_rejected(anon_client, users):
    token = create_session_token(user_id=users["admin"], jti=new_jti(), settings=session_token_settings)
    anon_client.cookies.set(settings.SESSION_COOKIE_NAME, token)
    assert anon_client.get(f"{API}/projects").status_code == 401


def test_change_password(user_client, anon_client):
    res = user_client.post(
        f"{API}/auth/change-password",
        json={"old_password": PASSWORDS["agent"], "new_password": "new-secret"},
    )
    assert res.status_code == 204
    assert login(anon_client, "agent", PASSWORDS["agent"]).status_code == 401
    assert login(anon_client, "agent", "new-secret").status_code == 200


def test_change_password_with_wrong_old_password(user_client):
    res = user_client.post(
        f"{API}/auth/change-password",
        json={"old_password": "wrong", "new_password": "new-secret"},
    )
    assert res.status_code == 401


def test_change_password_signs_out_other_sessions(make_client):
    current = make_client("agent")
    other = make_client("agent")

    res = current.post(
        f"{API}/auth/change-password",
        json={"old_password": PASSWORDS["agent"], "new_password": "new-secret"},
    )
    assert res.status_code == 204
    assert current.get(f"{API}/auth/user").status_code == 200
    assert other.get(f"{API}/auth/user").status_code == 401


def test_change_password_rejects_secret_over_bcrypt_limit(user_client):
    res = user_client.post(
        f"{API}/auth/change-password",
        json={"old_password": PASSWORDS["agent"], "new_password": "x" * 100},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "new_password"


def test_change_password_keeps_whitespace(user_client, anon_client):
    user_client.post(
        f"{API}/auth/change-password",
        json={"old_password": PASSWORDS["agent"], "new_password": " padded "},
    )
    assert login(anon_client, "agent", " padded ").status_code == 200
