from sqlalchemy.orm import Session

from jobtracker.core.constants import action_label_for
from jobtracker.core.dates import as_utc, start_of_day
from jobtracker.models.application import Application
from jobtracker.repos import application_repo
from jobtracker.schemas.calendar import CalendarEvent, CalendarEventResource


def to_event(application: Application) -> CalendarEvent:
    """All-day event on the UTC date of the application's next action."""
    action_date = as_utc(application.next_action_date)
    day = start_of_day(action_date.date())
    label = action_label_for(application.status)
    return CalendarEvent(
        id=application.id,
        title=f"{application.company_name} - {label}",
        start=day,
        end=day,
        all_day=True,
        resource=CalendarEventResource(
            company_id=application.id,
            company_name=application.company_name,
            status=application.status,
            position_title=application.position_title,
            position_type=application.position_type,
            action_title=label,
            next_action_date=action_date,
        ),
    )


def get_calendar_events(db: Session, user_id: str) -> list[CalendarEvent]:
    return [to_event(a) for a in application_repo.list_with_next_action(db, user_id)]
