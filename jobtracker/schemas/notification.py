from datetime import datetime
from typing import Literal

from pydantic import Field

from jobtracker.schemas.common import CamelModel

Urgency = Literal["high", "medium", "low"]


class UpcomingAction(CamelModel):
    company_id: str
    company_name: str
    position_title: str | None = None
    status: str
    action_title: str
    next_action_date: datetime
    days_until: int
    urgency: Urgency


class UpcomingActionsResponse(CamelModel):
    notifications: list[UpcomingAction]


class PastActionNotificationItem(CamelModel):
    notification_id: str
    company_id: str
    company_name: str
    position_title: str | None = None
    status: str
    action_date: datetime


class PastActionsResponse(CamelModel):
    notifications: list[PastActionNotificationItem]


class PastActionReply(CamelModel):
    company_id: str
    notification_id: str
    is_completed: bool
    completion_response: str | None = Field(default=None, max_length=1000)
