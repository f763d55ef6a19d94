from sqlalchemy.orm import Session

from jobtracker.core.constants import CLOSED_STATUSES, ApplicationStatus
from jobtracker.repos import application_repo
from jobtracker.schemas.application import ApplicationStats


def get_stats(db: Session, user_id: str) -> ApplicationStats:
    applications = application_repo.list_for_user(db, user_id)
    closed = {s.value for s in CLOSED_STATUSES}
    return ApplicationStats(
        total_applications=len(applications),
        active_applications=sum(1 for a in applications if a.status not in closed),
        offers_received=sum(1 for a in applications if a.status == ApplicationStatus.OFFER_RECEIVED.value),
    )
