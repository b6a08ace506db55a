# streamsphere/models/user.py
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from uuid import uuid4
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from streamsphere.models.common import utcnow

if TYPE_CHECKING:
    from streamsphere.models.movie import Movie

class UserRole(str, Enum):
    USER    = "user"
    CREATOR = "creator"

class UserBase(SQLModel):
    name: str = Field(nullable=False)
    email: str = Field(index=True, nullable=False, unique=True)
    # either a remote URL or an embedded data:image/... payload
    image: Optional[str] = None

class User(UserBase, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    hashed_password: str = Field(nullable=False)
    role: UserRole = Field(default=UserRole.USER, nullable=False)
    email_verified: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # forward-reference as string, no direct import of Movie
    movies: List["Movie"] = Relationship(back_populates="creator")
