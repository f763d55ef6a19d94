import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.dependencies import get_current_user
from jobtracker.models.user import User
from jobtracker.schemas.calendar import CalendarEventsResponse
from jobtracker.services.calendar_service import get_calendar_events

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/events", response_model=CalendarEventsResponse)
def get_events(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """One all-day event per application with a next-action date."""
    try:
        events = get_calendar_events(db, user.id)
        logger.debug("GET /calendar/events user=%s count=%d", user.id, len(events))
        return CalendarEventsResponse(events=events)
    except Exception as e:
        logger.exception("Calendar events failed for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching calendar events",
        ) from e
