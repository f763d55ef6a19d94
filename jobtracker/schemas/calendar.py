from datetime import datetime

from jobtracker.schemas.common import CamelModel


class CalendarEventResource(CamelModel):
    company_id: str
    company_name: str
    status: str
    position_title: str | None = None
    position_type: str | None = None
    action_title: str
    next_action_date: datetime


class CalendarEvent(CamelModel):
    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = True
    resource: CalendarEventResource


class CalendarEventsResponse(CamelModel):
    events: list[CalendarEvent]
