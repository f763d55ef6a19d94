from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobtracker.models.connection import Connection
from jobtracker.models.user import User
from jobtracker.core.security import hash_password, generate_id


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_taken(
    db: Session,
    *,
    username: str | None = None,
    email: str | None = None,
    exclude_user_id: str | None = None,
) -> User | None:
    """First user (other than ``exclude_user_id``) already holding the username or email."""
    clauses = []
    if username is not None:
        clauses.append(User.username == username)
    if email is not None:
        clauses.append(User.email == email)
    if not clauses:
        return None
    q = db.query(User).filter(or_(*clauses))
    if exclude_user_id is not None:
        q = q.filter(User.id != exclude_user_id)
    return q.first()


def create(db: Session, username: str, email: str, password: str) -> User:
    user = User(
        id=generate_id(),
        username=username,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    username: str | None = None,
    email: str | None = None,
    password_hash: str | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if username is not None:
        user.username = username
    if email is not None:
        user.email = email
    if password_hash is not None:
        user.password_hash = password_hash
    db.commit()
    db.refresh(user)
    return user


def search_others(db: Session, user_id: str, search: str | None = None) -> list[User]:
    """Every user except ``user_id``, by username; optional case-insensitive substring filter."""
    q = db.query(User).filter(User.id != user_id)
    if search and search.strip():
        term = search.strip()
        q = q.filter(
            or_(User.username.icontains(term, autoescape=True), User.email.icontains(term, autoescape=True))
        )
    return q.order_by(User.username.asc()).all()


def delete_user(db: Session, user_id: str) -> bool:
    """Delete user with their sessions, applications (and notifications) and connections.

    Everything goes in one commit. Returns True if the user existed.
    """
    user = get_by_id(db, user_id)
    if not user:
        return False
    db.query(Connection).filter(
        or_(Connection.requester_id == user_id, Connection.recipient_id == user_id)
    ).delete(synchronize_session=False)
    db.delete(user)
    db.commit()
    return True
