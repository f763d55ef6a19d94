from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

import jobtracker.dependencies as deps
from jobtracker.repos import session_repo


class _Session:
    def __init__(self, user_id="u1"):
        self.user_id = user_id


class _User:
    def __init__(self, user_id="u1"):
        self.id = user_id


def test_get_current_session_missing_cookie():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_session(db=object(), cookie=None)
    assert ex.value.status_code == 401
    assert ex.value.detail == "Authentication required"


def test_get_current_session_invalid_cookie(monkeypatch):
    monkeypatch.setattr(deps, "read_session_id", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_session(db=object(), cookie="bad")
    assert ex.value.status_code == 401


def test_get_current_session_unknown_session(monkeypatch):
    monkeypatch.setattr(deps, "read_session_id", lambda token: "sid-1")
    monkeypatch.setattr(deps, "get_active_session", lambda db, sid: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_session(db=object(), cookie="tok")
    assert ex.value.status_code == 401


def test_get_current_session_success(monkeypatch):
    auth_session = _Session()
    monkeypatch.setattr(deps, "read_session_id", lambda token: "sid-1")
    monkeypatch.setattr(deps, "get_active_session", lambda db, sid: auth_session)
    assert deps.get_current_session(db=object(), cookie="tok") is auth_session


def test_get_current_user_user_not_found(monkeypatch):
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), auth_session=_Session())
    assert ex.value.status_code == 401
    assert ex.value.detail == "User not found"


def test_get_current_user_success(monkeypatch):
    user = _User()
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: user if uid == "u1" else None)
    assert deps.get_current_user(db=object(), auth_session=_Session("u1")) is user


def test_expired_session_is_not_active(db, make_user):
    user = make_user("alice")
    past = datetime.now(timezone.utc) - timedelta(days=30)
    stale = session_repo.create(db, user.id, now=past)
    fresh = session_repo.create(db, user.id)

    assert session_repo.get_active(db, stale.id) is None
    assert session_repo.get_active(db, fresh.id).id == fresh.id

    assert session_repo.delete_expired(db) == 1
    assert session_repo.delete_all(db) == 1
