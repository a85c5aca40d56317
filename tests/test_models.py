from datetime import timedelta

import pytest
from sqlmodel import select

from pdr_tracker.db.models.base import utcnow
from pdr_tracker.db.models.local_users import LocalUser
from pdr_tracker.db.models.projects import Project
from pdr_tracker.db.models.sessions import AuthSession
from pdr_tracker.db.repositories.sessions import AuthSessionRepository


@pytest.mark.parametrize(
    "column",
    [
        Project.__table__.c.created_at,
        Project.__table__.c.updated_at,
        AuthSession.__table__.c.expires_at,
        AuthSession.__table__.c.revoked_at,
    ],
)
def test_datetime_columns_are_naive(column):
    assert column.type.timezone is False


def _user(session):
    user = LocalUser(username="u1", hashed_password="x", role="user")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def test_naive_utc_values_round_trip(session):
    user = _user(session)
    created_at = user.created_at
    session.expire_all()
    stored = session.exec(select(LocalUser)).one()
    assert stored.created_at.tzinfo is None
    assert stored.created_at == created_at


def test_session_expiry_is_compared_in_utc(session):
    user = _user(session)
    repo = AuthSessionRepository(session)
    common = {"user_id": user.id, "username": user.username, "role": user.role}
    repo.create(jti="live", expires_at=utcnow() + timedelta(hours=1), **common)
    repo.create(jti="old", expires_at=utcnow() - timedelta(seconds=1), **common)

    assert repo.get_active("live") is not None
    assert repo.get_active("old") is None
    assert repo.delete_expired() == 1
    assert [rec.jti for rec in repo.list_active_for_user(user.id)] == ["live"]


def test_revoke_all_can_keep_current_session(session):
    user = _user(session)
    repo = AuthSessionRepository(session)
    common = {"user_id": user.id, "username": user.username, "role": user.role}
    for jti in ("a", "b", "c"):
        repo.create(jti=jti, expires_at=utcnow() + timedelta(hours=1), **common)

    assert repo.revoke_all_for_user(user.id, keep_jti="b") == 2
    assert [rec.jti for rec in repo.list_active_for_user(user.id)] == ["b"]
