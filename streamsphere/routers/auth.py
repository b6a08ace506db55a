# streamsphere/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from streamsphere.database import get_db
from streamsphere.core.security import SessionContext, create_access_token, get_current_session
from streamsphere.schemas.token import LoginResponse
from streamsphere.schemas.user import (
    UserCreate,
    UserRead,
    LoginRequest,
    SessionRead,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    StatusResponse,
)
from streamsphere.services.user_service import (
    register_user,
    authenticate_user,
    get_profile,
    request_password_reset,
    reset_password as svc_reset_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
):
    """
    Register a new account.
    - Email must be unique
    - Role defaults to "user"; a new account may also start as "creator"
    """
    return register_user(db, user_in)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    user = authenticate_user(db, credentials.email, credentials.password)
    token = create_access_token(data={"sub": user.id})
    return {"access_token": token, "token_type": "bearer", "user": UserRead.model_validate(user)}


@router.get("/session", response_model=SessionRead)
def read_session(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    The signed-in user as currently stored, not as of token issue.
    """
    return {"user": get_profile(db, session)}


@router.post("/forgot-password", response_model=StatusResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
):
    request_password_reset(db, body.email, body.redirect_to)
    return StatusResponse()


@router.post("/reset-password", response_model=StatusResponse)
def reset_password(
    body: ResetPasswordRequest,
    db: Session = Depends(get_db),
):
    svc_reset_password(db, body.token, body.new_password)
    return StatusResponse()
