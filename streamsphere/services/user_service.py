import logging
import secrets
from datetime import timedelta
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from sqlmodel import Session
from streamsphere.repositories.user_repo import (
    get_user_by_email,
    create_user as repo_create_user,
    get_user as repo_get_user,
    update_user as repo_update_user,
)
from streamsphere.repositories.password_reset_repo import (
    create_reset,
    get_reset_by_token,
    mark_used,
)
from streamsphere.models.common import as_utc, utcnow
from streamsphere.models.user import User, UserRole
from streamsphere.schemas.user import UserCreate, UserRead, ProfileUpdate, SwitchRoleRequest
from streamsphere.core.config import settings
from streamsphere.core.errors import Conflict, NotFound, Unauthenticated, ValidationFailed
from streamsphere.core.security import SessionContext, hash_password, verify_password

logger = logging.getLogger(__name__)


def register_user(db: Session, user_in: UserCreate) -> UserRead:
    if get_user_by_email(db, user_in.email):
        raise ValidationFailed("Email already registered", "USER_ALREADY_EXISTS")

    hashed = hash_password(user_in.password)
    user = repo_create_user(db, user_in.name, user_in.email, hashed, user_in.role)
    logger.info("registered user %s as %s", user.id, user.role.value)
    return UserRead.model_validate(user)


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        raise Unauthenticated("Invalid email or password", "INVALID_CREDENTIALS")
    return user


def load_user(db: Session, session: SessionContext) -> User:
    """
    Re-read the session's user from the store. A valid token whose user is
    gone is a data problem, not an auth failure, hence 404.
    """
    user = repo_get_user(db, session.user_id)
    if not user:
        raise NotFound("User not found", "USER_NOT_FOUND")
    return user


def get_profile(db: Session, session: SessionContext) -> UserRead:
    return UserRead.model_validate(load_user(db, session))


def update_profile(db: Session, session: SessionContext, body: Dict[str, Any]) -> UserRead:
    update = ProfileUpdate.parse(body)
    user = load_user(db, session)

    fields: Dict[str, Optional[str]] = {}
    if update.name is not None:
        fields["name"] = update.name
    if update.image_set:
        fields["image"] = update.image

    user = repo_update_user(db, user, **fields)
    return UserRead.model_validate(user)


def switch_role(db: Session, session: SessionContext, body: Dict[str, Any]) -> UserRead:
    request = SwitchRoleRequest.parse(body)
    user = load_user(db, session)

    if user.role == request.role:
        raise Conflict(f"You are already a {request.role.value}", "SAME_ROLE")

    # owned movies keep their creator_id whichever way the switch goes
    user = repo_update_user(db, user, role=request.role)
    logger.info("user %s switched role to %s", user.id, user.role.value)
    return UserRead.model_validate(user)


def upgrade_to_creator(db: Session, session: SessionContext) -> UserRead:
    user = load_user(db, session)
    if user.role == UserRole.CREATOR:
        raise Conflict("You are already a creator", "ALREADY_CREATOR")

    user = repo_update_user(db, user, role=UserRole.CREATOR)
    logger.info("user %s upgraded to creator", user.id)
    return UserRead.model_validate(user)


def is_site_path(path: str) -> bool:
    # browsers read "//host" and "/\host" as links to another host
    return path.startswith("/") and path[1:2] not in ("/", "\\")


def request_password_reset(db: Session, email: str, redirect_to: Optional[str] = None) -> None:
    """
    Issue a one-hour reset token for ``email``. Unknown addresses are
    accepted silently so the endpoint can't be used to probe accounts.
    ``redirect_to`` must be a path on the front-end, never another host.
    """
    if redirect_to is not None and not is_site_path(redirect_to):
        raise ValidationFailed("redirectTo must be a path starting with /", "INVALID_REDIRECT")

    user = get_user_by_email(db, email)
    if not user:
        logger.info("password reset requested for unknown email")
        return

    token = secrets.token_urlsafe(32)
    expires_at = utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    create_reset(db, user.id, token, expires_at)

    # no mail transport; the link goes to the server log
    base = settings.FRONTEND_URL.rstrip("/") + (redirect_to or "/reset-password")
    logger.info(
        "password reset for %s: %s?%s (expires in %d minutes)",
        user.email,
        base,
        urlencode({"token": token}),
        settings.PASSWORD_RESET_EXPIRE_MINUTES,
    )


def reset_password(db: Session, token: str, new_password: str) -> None:
    reset = get_reset_by_token(db, token)
    if not reset or reset.used or as_utc(reset.expires_at) < utcnow():
        raise ValidationFailed("Invalid or expired reset token", "INVALID_TOKEN")

    user = repo_get_user(db, reset.user_id)
    if not user:
        raise ValidationFailed("Invalid or expired reset token", "INVALID_TOKEN")

    repo_update_user(db, user, hashed_password=hash_password(new_password))
    mark_used(db, reset)
