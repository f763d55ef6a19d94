import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from jobtracker.core.errors import AppError
from jobtracker.database import get_db
from jobtracker.dependencies import get_current_user
from jobtracker.models.user import User
from jobtracker.schemas.connection import (
    ConnectionProgressResponse,
    ConnectionResponse,
    ConnectionsResponse,
    FollowRequest,
    FollowResponse,
    PendingRequestsResponse,
    RespondRequest,
    RespondResponse,
    UserProfileResponse,
    UsersResponse,
)
from jobtracker.services.connection_service import (
    get_connection_progress,
    get_mutual_connections,
    get_pending_requests,
    get_user_profile,
    list_users,
    respond_to_request,
    send_follow_request,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/connections", tags=["connections"])


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("/users", response_model=UsersResponse)
def get_all_users(
    search: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Every other user with the caller's connection state to them."""
    try:
        return UsersResponse(users=list_users(db, user.id, search))
    except Exception as e:
        logger.exception("List users failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while fetching users") from e


@router.post("/follow", response_model=FollowResponse, status_code=status.HTTP_201_CREATED)
def follow(
    body: FollowRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        connection = send_follow_request(db, user.id, body.recipient_id)
        return FollowResponse(
            message="Follow request sent successfully",
            connection=ConnectionResponse.model_validate(connection),
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Follow request failed: %s -> %s: %s", user.id, body.recipient_id, e)
        raise _server_error("Server error while sending follow request") from e


@router.get("/requests", response_model=PendingRequestsResponse)
def get_requests(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return PendingRequestsResponse(requests=get_pending_requests(db, user.id))
    except Exception as e:
        logger.exception("Pending requests failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while fetching requests") from e


@router.post("/respond", response_model=RespondResponse)
def respond(
    body: RespondRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        connection = respond_to_request(db, body.connection_id, user.id, body.action)
        if connection is None:
            return RespondResponse(message="Connection request rejected")
        return RespondResponse(
            message="Connection request accepted",
            connection=ConnectionResponse.model_validate(connection),
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Respond failed for user=%s connection=%s: %s", user.id, body.connection_id, e)
        raise _server_error("Server error while responding to request") from e


@router.get("", response_model=ConnectionsResponse)
def get_connections(
    target_user_id: str | None = Query(default=None, alias="targetUserId"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Accepted connections; with targetUserId, only those shared with that user."""
    try:
        return ConnectionsResponse(connections=get_mutual_connections(db, user.id, target_user_id))
    except Exception as e:
        logger.exception("List connections failed for user=%s: %s", user.id, e)
        raise _server_error("Server error while fetching connections") from e


@router.get("/profile/{user_id}", response_model=UserProfileResponse)
def get_profile(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return get_user_profile(db, user.id, user_id)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Profile lookup failed for user=%s target=%s: %s", user.id, user_id, e)
        raise _server_error("Server error while fetching user profile") from e


@router.get("/progress/{user_id}", response_model=ConnectionProgressResponse)
def get_progress(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """A connected user's non-private applications and per-status counts."""
    try:
        return get_connection_progress(db, user.id, user_id)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Progress lookup failed for user=%s target=%s: %s", user.id, user_id, e)
        raise _server_error("Server error while fetching connection progress") from e
