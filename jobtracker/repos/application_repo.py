from datetime import datetime

from sqlalchemy.orm import Session

from jobtracker.core.constants import ApplicationStatus
from jobtracker.core.security import generate_id
from jobtracker.models.application import Application


def create(db: Session, user_id: str, fields: dict) -> Application:
    application = Application(id=generate_id(), user_id=user_id, **fields)
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def list_for_user(db: Session, user_id: str) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == user_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def get_for_user(db: Session, application_id: str, user_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == user_id)
        .first()
    )


def update(db: Session, application_id: str, user_id: str, changes: dict) -> Application | None:
    """Partial merge: only keys present in ``changes`` are written."""
    application = get_for_user(db, application_id, user_id)
    if not application:
        return None
    for field, value in changes.items():
        setattr(application, field, value)
    db.commit()
    db.refresh(application)
    return application


def delete(db: Session, application_id: str, user_id: str) -> bool:
    """Delete an owned application and its notification rows. Returns True if deleted."""
    application = get_for_user(db, application_id, user_id)
    if not application:
        return False
    db.delete(application)
    db.commit()
    return True


def list_with_next_action(db: Session, user_id: str) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == user_id, Application.next_action_date.isnot(None))
        .order_by(Application.next_action_date.asc())
        .all()
    )


def list_next_action_between(
    db: Session, user_id: str, start: datetime, end: datetime
) -> list[Application]:
    return (
        db.query(Application)
        .filter(
            Application.user_id == user_id,
            Application.next_action_date >= start,
            Application.next_action_date <= end,
        )
        .order_by(Application.next_action_date.asc())
        .all()
    )


def list_next_action_before(db: Session, user_id: str, before: datetime) -> list[Application]:
    """Open applications whose next action has lapsed; rejected ones are skipped."""
    return (
        db.query(Application)
        .filter(
            Application.user_id == user_id,
            Application.next_action_date < before,
            Application.status != ApplicationStatus.REJECTED.value,
        )
        .order_by(Application.next_action_date.asc())
        .all()
    )


def list_shared_for_user(db: Session, user_id: str) -> list[Application]:
    """Applications a connected user may see: everything not flagged private."""
    return (
        db.query(Application)
        .filter(Application.user_id == user_id, Application.is_private.is_(False))
        .order_by(Application.created_at.desc())
        .all()
    )
