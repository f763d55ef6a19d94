from datetime import datetime

from sqlalchemy.orm import Session

from jobtracker.core.dates import as_utc, utcnow
from jobtracker.core.security import generate_id
from jobtracker.models.application import Application
from jobtracker.models.past_action_notification import PastActionNotification


def find_for_action_date(application: Application, action_date: datetime) -> PastActionNotification | None:
    target = as_utc(action_date)
    for notification in application.past_action_notifications:
        if as_utc(notification.action_date) == target:
            return notification
    return None


def create(db: Session, application: Application, action_date: datetime) -> PastActionNotification:
    notification = PastActionNotification(
        id=generate_id(),
        application_id=application.id,
        action_date=action_date,
        created_at=utcnow(),
        is_completed=False,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def get_for_application(
    db: Session, notification_id: str, application_id: str
) -> PastActionNotification | None:
    return (
        db.query(PastActionNotification)
        .filter(
            PastActionNotification.id == notification_id,
            PastActionNotification.application_id == application_id,
        )
        .first()
    )


def record_response(
    db: Session,
    notification: PastActionNotification,
    is_completed: bool,
    completion_response: str | None,
    responded_at: datetime | None = None,
) -> PastActionNotification:
    notification.is_completed = is_completed
    notification.completion_response = (completion_response or "").strip()
    notification.responded_at = responded_at or utcnow()
    db.commit()
    db.refresh(notification)
    return notification
