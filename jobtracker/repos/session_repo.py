from datetime import datetime

from sqlalchemy.orm import Session

from jobtracker.core.dates import as_utc, utcnow
from jobtracker.core.security import generate_session_id, session_expiry
from jobtracker.models.auth_session import AuthSession


def create(db: Session, user_id: str, now: datetime | None = None) -> AuthSession:
    now = now or utcnow()
    auth_session = AuthSession(
        id=generate_session_id(),
        user_id=user_id,
        created_at=now,
        expires_at=session_expiry(now),
    )
    db.add(auth_session)
    db.commit()
    db.refresh(auth_session)
    return auth_session


def get_active(db: Session, session_id: str, now: datetime | None = None) -> AuthSession | None:
    auth_session = db.query(AuthSession).filter(AuthSession.id == session_id).first()
    if not auth_session:
        return None
    if as_utc(auth_session.expires_at) <= (now or utcnow()):
        return None
    return auth_session


def delete(db: Session, session_id: str) -> bool:
    deleted = db.query(AuthSession).filter(AuthSession.id == session_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def delete_expired(db: Session, now: datetime | None = None) -> int:
    deleted = (
        db.query(AuthSession)
        .filter(AuthSession.expires_at <= (now or utcnow()))
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def delete_all(db: Session) -> int:
    deleted = db.query(AuthSession).delete(synchronize_session=False)
    db.commit()
    return deleted
