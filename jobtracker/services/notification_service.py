"""Upcoming and lapsed next-action notifications, derived per request.

Days are UTC calendar days; ``now`` is injectable for tests.
"""
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.config import settings
from jobtracker.core.constants import action_label_for
from jobtracker.core.dates import as_utc, day_window, days_between, start_of_day, utcnow
from jobtracker.core.errors import NotFoundError
from jobtracker.repos import application_repo, notification_repo
from jobtracker.schemas.notification import PastActionNotificationItem, UpcomingAction

logger = logging.getLogger(__name__)


def urgency_for(days_until: int) -> str:
    if days_until == 0:
        return "high"
    if days_until == 1:
        return "medium"
    return "low"


def get_upcoming_actions(
    db: Session,
    user_id: str,
    now: datetime | None = None,
    window_days: int | None = None,
) -> list[UpcomingAction]:
    now = as_utc(now) if now else utcnow()
    if window_days is None:
        window_days = settings.upcoming_window_days
    start, end = day_window(now, window_days)
    today = now.date()

    result = []
    for application in application_repo.list_next_action_between(db, user_id, start, end):
        days_until = days_between(today, application.next_action_date)
        result.append(
            UpcomingAction(
                company_id=application.id,
                company_name=application.company_name,
                position_title=application.position_title,
                status=application.status,
                action_title=action_label_for(application.status),
                next_action_date=as_utc(application.next_action_date),
                days_until=days_until,
                urgency=urgency_for(days_until),
            )
        )
    return result


def get_past_action_notifications(
    db: Session, user_id: str, now: datetime | None = None
) -> list[PastActionNotificationItem]:
    """Lapsed next actions still awaiting an answer; registers newly lapsed ones."""
    now = as_utc(now) if now else utcnow()
    today_start = start_of_day(now.date())

    result = []
    for application in application_repo.list_next_action_before(db, user_id, today_start):
        notification = notification_repo.find_for_action_date(application, application.next_action_date)
        if notification is None:
            try:
                notification = notification_repo.create(db, application, application.next_action_date)
            except IntegrityError:
                # Registered by a concurrent request for the same date.
                db.rollback()
                db.refresh(application)
                notification = notification_repo.find_for_action_date(application, application.next_action_date)
                if notification is None:
                    raise
        if notification.responded_at is not None:
            continue
        result.append(
            PastActionNotificationItem(
                notification_id=notification.id,
                company_id=application.id,
                company_name=application.company_name,
                position_title=application.position_title,
                status=application.status,
                action_date=as_utc(notification.action_date),
            )
        )
    logger.debug("Past-action notifications for %s: %d", user_id, len(result))
    return result


def respond_to_past_action(
    db: Session,
    user_id: str,
    company_id: str,
    notification_id: str,
    is_completed: bool,
    completion_response: str | None = None,
):
    application = application_repo.get_for_user(db, company_id, user_id)
    if not application:
        raise NotFoundError("Company not found")
    notification = notification_repo.get_for_application(db, notification_id, application.id)
    if not notification:
        raise NotFoundError("Notification not found")
    notification = notification_repo.record_response(db, notification, is_completed, completion_response)
    logger.info(
        "Past action answered: company=%s notification=%s completed=%s",
        company_id, notification_id, is_completed,
    )
    return notification
