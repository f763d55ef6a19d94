import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobtracker.core.errors import AppError, NotFoundError
from jobtracker.database import get_db
from jobtracker.dependencies import get_current_user
from jobtracker.models.user import User
from jobtracker.repos.application_repo import (
    create as create_application,
    delete as delete_application,
    get_for_user,
    list_for_user,
    update as update_application,
)
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationEnvelope,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStatsResponse,
    ApplicationUpdate,
)
from jobtracker.schemas.common import MessageResponse
from jobtracker.schemas.notification import PastActionReply, PastActionsResponse, UpcomingActionsResponse
from jobtracker.services.application_service import get_stats
from jobtracker.services.notification_service import (
    get_past_action_notifications,
    get_upcoming_actions,
    respond_to_past_action,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/companies", tags=["companies"])


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("", response_model=ApplicationListResponse)
def get_all_companies(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        applications = list_for_user(db, user.id)
        logger.debug("GET /companies user=%s count=%d", user.id, len(applications))
        return ApplicationListResponse(companies=[ApplicationResponse.model_validate(a) for a in applications])
    except Exception as e:
        logger.exception("List companies failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while fetching companies") from e


@router.post("", response_model=ApplicationEnvelope, status_code=status.HTTP_201_CREATED)
def create_company(
    body: ApplicationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        application = create_application(db, user.id, body.to_fields())
        logger.info("Company created: user=%s company=%s", user.id, application.id)
        return ApplicationEnvelope(
            company=ApplicationResponse.model_validate(application),
            message="Company created successfully",
        )
    except Exception as e:
        logger.exception("Create company failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while creating company") from e


@router.get("/stats", response_model=ApplicationStatsResponse)
def get_company_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Totals for the dashboard: all, still active, and offers."""
    return ApplicationStatsResponse(stats=get_stats(db, user.id))


@router.get("/notifications/upcoming", response_model=UpcomingActionsResponse)
def get_upcoming_notifications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Next actions due today through the end of the upcoming window, soonest first."""
    return UpcomingActionsResponse(notifications=get_upcoming_actions(db, user.id))


@router.get("/notifications/past-actions", response_model=PastActionsResponse)
def get_past_action_notifications_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return PastActionsResponse(notifications=get_past_action_notifications(db, user.id))
    except Exception as e:
        logger.exception("Past-action notifications failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while fetching notifications") from e


@router.post("/notifications/respond", response_model=MessageResponse)
def respond_to_past_action_route(
    body: PastActionReply,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        respond_to_past_action(
            db,
            user.id,
            company_id=body.company_id,
            notification_id=body.notification_id,
            is_completed=body.is_completed,
            completion_response=body.completion_response,
        )
        return MessageResponse(message="Response recorded successfully")
    except AppError:
        raise
    except Exception as e:
        logger.exception("Past-action response failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while recording response") from e


@router.get("/{company_id}", response_model=ApplicationEnvelope)
def get_company(
    company_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    application = get_for_user(db, company_id, user.id)
    if not application:
        raise NotFoundError("Company not found")
    return ApplicationEnvelope(company=ApplicationResponse.model_validate(application))


@router.put("/{company_id}", response_model=ApplicationEnvelope)
def update_company(
    company_id: str,
    body: ApplicationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Partial update: only the fields present in the body are written."""
    try:
        application = update_application(db, company_id, user.id, body.to_changes())
        if not application:
            raise NotFoundError("Company not found")
        logger.info("Company updated: user=%s company=%s", user.id, company_id)
        return ApplicationEnvelope(
            company=ApplicationResponse.model_validate(application),
            message="Company updated successfully",
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Update company failed for user=%s company=%s: %s", user.id, company_id, e)
        raise _server_error("Server error while updating company") from e


@router.delete("/{company_id}", response_model=MessageResponse)
def delete_company(
    company_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        if not delete_application(db, company_id, user.id):
            raise NotFoundError("Company not found")
        logger.info("Company deleted: user=%s company=%s", user.id, company_id)
        return MessageResponse(message="Company deleted successfully")
    except AppError:
        raise
    except Exception as e:
        logger.exception("Delete company failed for user=%s company=%s: %s", user.id, company_id, e)
        raise _server_error("Server error while deleting company") from e
