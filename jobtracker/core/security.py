import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from jobtracker.config import settings


def _prehash(password: str) -> bytes:
    """Pre-hash to avoid bcrypt's 72-byte limit."""
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return bcrypt.checkpw(_prehash(plain), hashed.encode())


def generate_id() -> str:
    return str(uuid4())


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


def session_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=settings.session_expire_minutes)


def sign_session_id(session_id: str, expires_at: datetime) -> str:
    """Cookie value: the session id, signed with the app secret."""
    to_encode = {"sid": session_id, "exp": expires_at}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def read_session_id(token: str) -> str | None:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return payload.get("sid")
    except JWTError:
        return None
