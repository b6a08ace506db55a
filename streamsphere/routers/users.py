# streamsphere/routers/users.py
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session
from streamsphere.database import get_db
from streamsphere.core.security import SessionContext, get_current_session
from streamsphere.schemas.user import UserRead, RoleChangeResponse
from streamsphere.services.user_service import (
    get_profile,
    update_profile,
    switch_role as svc_switch_role,
    upgrade_to_creator as svc_upgrade_to_creator,
)

router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "/profile",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
)
def read_profile(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return get_profile(db, session)


@router.put(
    "/profile",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
)
def edit_profile(
    body: Dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Update ``name`` and/or the avatar. ``imageFile`` (a data:image/... URL,
    max 5MB) takes precedence over ``image`` (a plain URL); sending either
    as null clears the avatar.
    """
    return update_profile(db, session, body)


@router.post(
    "/switch-role",
    response_model=RoleChangeResponse,
    status_code=status.HTTP_200_OK,
)
def switch_role(
    body: Dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    user = svc_switch_role(db, session, body)
    return RoleChangeResponse(
        message=f"Successfully switched to {user.role.value} role",
        user=user,
    )


@router.post(
    "/upgrade-to-creator",
    response_model=RoleChangeResponse,
    status_code=status.HTTP_200_OK,
)
def upgrade_to_creator(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    user = svc_upgrade_to_creator(db, session)
    return RoleChangeResponse(
        message="Successfully upgraded to creator account",
        user=user,
    )
