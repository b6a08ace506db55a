# streamsphere/core/security.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from streamsphere.core.config import settings
from streamsphere.core.errors import Unauthenticated

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

# we render our own 401 body, so don't let FastAPI raise first
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """
    Identity attached to one request. Carries no role: roles change while
    tokens live, so role checks always read the user from the database.
    """
    user_id: str


def hash_password(password: str) -> str:
    pw = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    pw = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw, hashed_password.encode("utf-8"))
    except ValueError:
        # malformed hash in the store
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[SessionContext]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    return SessionContext(user_id=str(user_id))


def get_session(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[SessionContext]:
    """The current session, or None for anonymous requests."""
    if not token:
        return None
    return decode_access_token(token)


def get_current_session(
    session: Optional[SessionContext] = Depends(get_session),
) -> SessionContext:
    if session is None:
        raise Unauthenticated()
    return session
