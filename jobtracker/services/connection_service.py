"""Follow-request state machine and social-graph queries.

A pair of users is in one of three states: ``none`` (no row), ``pending`` or
``accepted``. Rejection deletes the row, returning the pair to ``none``.
Nothing leaves ``accepted``. Every function takes the caller's user id
explicitly.
"""
import logging
from collections import Counter

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.core.constants import ConnectionAction, ConnectionStatus
from jobtracker.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from jobtracker.models.connection import Connection
from jobtracker.repos import application_repo, connection_repo, user_repo
from jobtracker.schemas.application import SharedApplicationResponse
from jobtracker.schemas.common import PublicUser
from jobtracker.schemas.connection import (
    ConnectionProgressResponse,
    ExploreUser,
    MutualConnection,
    PendingRequest,
    UserProfileResponse,
)

logger = logging.getLogger(__name__)


def pair_state(connection: Connection | None, viewer_id: str) -> tuple[ConnectionStatus, bool]:
    """(status, is_requester) of a pair as seen by ``viewer_id``."""
    if connection is None:
        return ConnectionStatus.NONE, False
    return ConnectionStatus(connection.status), connection.requester_id == viewer_id


def list_users(db: Session, caller_id: str, search: str | None = None) -> list[ExploreUser]:
    users = user_repo.search_others(db, caller_id, search)
    by_other = {c.other_party_id(caller_id): c for c in connection_repo.list_for_user(db, caller_id)}
    degrees = connection_repo.count_accepted_by_user(db, [u.id for u in users])
    logger.debug("Explore users for %s: search=%r results=%d", caller_id, search, len(users))

    result = []
    for user in users:
        status, is_requester = pair_state(by_other.get(user.id), caller_id)
        result.append(
            ExploreUser(
                id=user.id,
                username=user.username,
                email=user.email,
                created_at=user.created_at,
                connection_status=status,
                is_requester=is_requester,
                connections_count=degrees.get(user.id, 0),
            )
        )
    return result


def send_follow_request(db: Session, requester_id: str, recipient_id: str) -> Connection:
    if requester_id == recipient_id:
        raise ValidationError("You cannot follow yourself")
    if not user_repo.get_by_id(db, recipient_id):
        raise NotFoundError("User not found")
    if connection_repo.find_between(db, requester_id, recipient_id):
        raise ConflictError("Connection request already exists")
    try:
        connection = connection_repo.create_pending(db, requester_id, recipient_id)
    except IntegrityError as e:
        # A concurrent request for the same pair won the insert.
        db.rollback()
        raise ConflictError("Connection request already exists") from e
    logger.info("Follow request sent: %s -> %s (connection=%s)", requester_id, recipient_id, connection.id)
    return connection


def get_pending_requests(db: Session, user_id: str) -> list[PendingRequest]:
    return [
        PendingRequest(
            id=c.id,
            requester=PublicUser.model_validate(c.requester),
            status=ConnectionStatus(c.status),
            created_at=c.created_at,
        )
        for c in connection_repo.list_pending_for_recipient(db, user_id)
    ]


def respond_to_request(
    db: Session, connection_id: str, recipient_id: str, action: ConnectionAction | str
) -> Connection | None:
    """Accept (returns the connection) or reject (deletes it, returns None) a pending request."""
    try:
        action = ConnectionAction(action)
    except ValueError as e:
        raise ValidationError("Invalid action") from e

    connection = connection_repo.get_pending_for_recipient(db, connection_id, recipient_id)
    if not connection:
        raise NotFoundError("Connection request not found")

    if action is ConnectionAction.ACCEPT:
        connection = connection_repo.accept(db, connection)
        logger.info("Connection accepted: %s by %s", connection_id, recipient_id)
        return connection

    connection_repo.delete(db, connection)
    logger.info("Connection rejected: %s by %s", connection_id, recipient_id)
    return None


def get_mutual_connections(
    db: Session, user_id: str, target_user_id: str | None = None
) -> list[MutualConnection]:
    """The caller's accepted connections, narrowed to those shared with ``target_user_id`` if given."""
    connections = connection_repo.list_accepted_for_user(db, user_id)
    if target_user_id:
        shared = connection_repo.accepted_neighbor_ids(db, target_user_id)
        connections = [c for c in connections if c.other_party_id(user_id) in shared]
    return [
        MutualConnection(
            connection_id=c.id,
            user=PublicUser.model_validate(c.other_party(user_id)),
            connected_at=c.updated_at,
        )
        for c in connections
    ]


def get_user_profile(db: Session, caller_id: str, user_id: str) -> UserProfileResponse:
    user = user_repo.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    status, _ = pair_state(connection_repo.find_between(db, caller_id, user_id), caller_id)
    return UserProfileResponse(user=PublicUser.model_validate(user), connection_status=status)


def status_breakdown(applications) -> dict[str, int]:
    return dict(Counter(a.status for a in applications))


def get_connection_progress(db: Session, viewer_id: str, owner_id: str) -> ConnectionProgressResponse:
    if viewer_id == owner_id or not connection_repo.find_accepted_between(db, viewer_id, owner_id):
        raise ForbiddenError("Not connected to this user")
    owner = user_repo.get_by_id(db, owner_id)
    if not owner:
        raise NotFoundError("User not found")

    applications = application_repo.list_shared_for_user(db, owner_id)
    return ConnectionProgressResponse(
        user=PublicUser.model_validate(owner),
        companies=[SharedApplicationResponse.model_validate(a) for a in applications],
        total_applications=len(applications),
        status_breakdown=status_breakdown(applications),
    )
