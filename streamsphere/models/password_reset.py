# streamsphere/models/password_reset.py
from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from streamsphere.models.common import utcnow

class PasswordReset(SQLModel, table=True):
    __tablename__ = "password_resets"

    id: Optional[int] = Field(default=None, primary_key=True)
    token: str = Field(index=True, unique=True, nullable=False)
    user_id: str = Field(foreign_key="users.id", nullable=False)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))
    used: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
