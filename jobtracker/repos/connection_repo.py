from collections import Counter

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from jobtracker.core.constants import ConnectionStatus
from jobtracker.core.security import generate_id
from jobtracker.models.connection import Connection, pair_key


def find_between(db: Session, user_a: str, user_b: str) -> Connection | None:
    """The pair's connection row in either direction, whatever its status."""
    low, high = pair_key(user_a, user_b)
    return (
        db.query(Connection)
        .filter(Connection.user_low_id == low, Connection.user_high_id == high)
        .first()
    )


def find_accepted_between(db: Session, user_a: str, user_b: str) -> Connection | None:
    connection = find_between(db, user_a, user_b)
    if connection and connection.status == ConnectionStatus.ACCEPTED.value:
        return connection
    return None


def create_pending(db: Session, requester_id: str, recipient_id: str) -> Connection:
    """Insert a pending request. The pair constraint raises IntegrityError on duplicates."""
    low, high = pair_key(requester_id, recipient_id)
    connection = Connection(
        id=generate_id(),
        requester_id=requester_id,
        recipient_id=recipient_id,
        user_low_id=low,
        user_high_id=high,
        status=ConnectionStatus.PENDING.value,
    )
    db.add(connection)
    db.commit()
    db.refresh(connection)
    return connection


def get_pending_for_recipient(db: Session, connection_id: str, recipient_id: str) -> Connection | None:
    return (
        db.query(Connection)
        .filter(
            Connection.id == connection_id,
            Connection.recipient_id == recipient_id,
            Connection.status == ConnectionStatus.PENDING.value,
        )
        .first()
    )


def accept(db: Session, connection: Connection) -> Connection:
    connection.status = ConnectionStatus.ACCEPTED.value
    db.commit()
    db.refresh(connection)
    return connection


def delete(db: Session, connection: Connection) -> None:
    db.delete(connection)
    db.commit()


def list_pending_for_recipient(db: Session, user_id: str) -> list[Connection]:
    return (
        db.query(Connection)
        .options(joinedload(Connection.requester))
        .filter(
            Connection.recipient_id == user_id,
            Connection.status == ConnectionStatus.PENDING.value,
        )
        .order_by(Connection.created_at.desc())
        .all()
    )


def list_accepted_for_user(db: Session, user_id: str) -> list[Connection]:
    return (
        db.query(Connection)
        .options(joinedload(Connection.requester), joinedload(Connection.recipient))
        .filter(
            or_(Connection.requester_id == user_id, Connection.recipient_id == user_id),
            Connection.status == ConnectionStatus.ACCEPTED.value,
        )
        .order_by(Connection.updated_at.desc())
        .all()
    )


def accepted_neighbor_ids(db: Session, user_id: str) -> set[str]:
    rows = (
        db.query(Connection.requester_id, Connection.recipient_id)
        .filter(
            or_(Connection.requester_id == user_id, Connection.recipient_id == user_id),
            Connection.status == ConnectionStatus.ACCEPTED.value,
        )
        .all()
    )
    return {recipient if requester == user_id else requester for requester, recipient in rows}


def list_for_user(db: Session, user_id: str) -> list[Connection]:
    """All rows touching ``user_id``, pending or accepted."""
    return (
        db.query(Connection)
        .filter(or_(Connection.requester_id == user_id, Connection.recipient_id == user_id))
        .all()
    )


def count_accepted_by_user(db: Session, user_ids: list[str]) -> dict[str, int]:
    """Accepted-connection degree for each of ``user_ids`` (0 when absent)."""
    if not user_ids:
        return {}
    wanted = set(user_ids)
    rows = (
        db.query(Connection.requester_id, Connection.recipient_id)
        .filter(
            Connection.status == ConnectionStatus.ACCEPTED.value,
            or_(Connection.requester_id.in_(wanted), Connection.recipient_id.in_(wanted)),
        )
        .all()
    )
    counts = Counter()
    for requester, recipient in rows:
        if requester in wanted:
            counts[requester] += 1
        if recipient in wanted:
            counts[recipient] += 1
    return {user_id: counts.get(user_id, 0) for user_id in user_ids}
