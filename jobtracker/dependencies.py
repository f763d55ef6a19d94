import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from jobtracker.config import settings
from jobtracker.database import get_db
from jobtracker.core.security import read_session_id
from jobtracker.repos.session_repo import get_active as get_active_session
from jobtracker.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def get_current_session(
    db: Session = Depends(get_db),
    cookie: str | None = Depends(session_cookie),
):
    """The live AuthSession named by the signed session cookie."""
    if not cookie:
        logger.info("Auth failed: missing session cookie")
        raise _unauthorized("Authentication required")
    session_id = read_session_id(cookie)
    if not session_id:
        logger.info("Auth failed: invalid or expired session cookie")
        raise _unauthorized("Authentication required")
    auth_session = get_active_session(db, session_id)
    if not auth_session:
        logger.info("Auth failed: session not found or expired")
        raise _unauthorized("Authentication required")
    return auth_session


def get_current_user(
    db: Session = Depends(get_db),
    auth_session=Depends(get_current_session),
) -> "User":
    from jobtracker.models.user import User  # noqa: F401

    user = get_by_id(db, auth_session.user_id)
    if not user:
        logger.info("Auth failed: user from session not found")
        raise _unauthorized("User not found")
    return user
