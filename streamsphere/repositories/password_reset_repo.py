from typing import Optional
from datetime import datetime
from sqlmodel import Session, select
from streamsphere.models.password_reset import PasswordReset

def create_reset(db: Session, user_id: str, token: str, expires_at: datetime) -> PasswordReset:
    reset = PasswordReset(user_id=user_id, token=token, expires_at=expires_at)
    db.add(reset)
    db.commit()
    db.refresh(reset)
    return reset

def get_reset_by_token(db: Session, token: str) -> Optional[PasswordReset]:
    stmt = select(PasswordReset).where(PasswordReset.token == token)
    return db.exec(stmt).first()

def mark_used(db: Session, reset: PasswordReset) -> None:
    reset.used = True
    db.add(reset)
    db.commit()
