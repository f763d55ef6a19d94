import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.config import settings
from jobtracker.core.dates import as_utc
from jobtracker.core.security import hash_password, read_session_id, sign_session_id, verify_password
from jobtracker.database import get_db
from jobtracker.dependencies import get_current_user
from jobtracker.models.user import User
from jobtracker.repos.session_repo import create as create_session, delete as delete_session
from jobtracker.repos.user_repo import (
    create as create_user,
    delete_user,
    find_taken,
    get_by_username,
    update as update_user,
)
from jobtracker.schemas.auth import AuthResponse, UserLogin, UserProfileUpdate, UserRegister, UserResponse
from jobtracker.schemas.common import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(user=UserResponse.model_validate(user))


def _start_session(db: Session, response: Response, user: User) -> None:
    auth_session = create_session(db, user.id)
    expires_at = as_utc(auth_session.expires_at)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_id(auth_session.id, expires_at),
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def _end_session(db: Session, request: Request, response: Response) -> None:
    cookie = request.cookies.get(settings.session_cookie_name)
    session_id = read_session_id(cookie) if cookie else None
    if session_id:
        delete_session(db, session_id)
    response.delete_cookie(settings.session_cookie_name)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, response: Response, db: Session = Depends(get_db)):
    try:
        if find_taken(db, username=data.username, email=data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email or username already exists",
            )
        try:
            user = create_user(db, data.username, data.email, data.password)
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same username or email.
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email or username already exists",
            ) from e
        _start_session(db, response, user)
        logger.info("User registered: %s", user.username)
        return _auth_response(user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Register failed for username=%s: %s", data.username, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error during registration"
        ) from e


@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, response: Response, db: Session = Depends(get_db)):
    try:
        user = get_by_username(db, data.username.strip())
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )
        _start_session(db, response, user)
        logger.info("User logged in: %s", user.username)
        return _auth_response(user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for username=%s: %s", data.username, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error during login"
        ) from e


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    try:
        _end_session(db, request, response)
        return MessageResponse(message="Logged out successfully")
    except Exception as e:
        logger.exception("Logout failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not log out") from e


@router.get("/user", response_model=AuthResponse)
def get_user(user: User = Depends(get_current_user)):
    return _auth_response(user)


@router.put("/profile", response_model=AuthResponse)
def update_profile(
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        if data.new_password is not None and not verify_password(data.current_password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect",
            )

        new_username = data.username if data.username and data.username != user.username else None
        new_email = data.email if data.email and data.email != user.email else None
        if new_username or new_email:
            existing = find_taken(db, username=new_username, email=new_email, exclude_user_id=user.id)
            if existing:
                detail = "Username already taken" if existing.username == new_username else "Email already in use"
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

        password_hash = hash_password(data.new_password) if data.new_password is not None else None
        try:
            user = update_user(db, user.id, username=new_username, email=new_email, password_hash=password_hash)
        except IntegrityError as e:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username or email already in use",
            ) from e
        logger.info("Profile updated: %s", user.id)
        return _auth_response(user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error during profile update"
        ) from e


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    response: Response,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    user_id = user.id
    try:
        delete_user(db, user_id)
        response.delete_cookie(settings.session_cookie_name)
        logger.info("Account deleted: %s", user_id)
        return MessageResponse(message="Account deleted successfully")
    except Exception as e:
        logger.exception("Account delete failed for user=%s: %s", user_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error during account deletion"
        ) from e
