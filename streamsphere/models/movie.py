# streamsphere/models/movie.py
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from streamsphere.models.common import utcnow

if TYPE_CHECKING:
    from streamsphere.models.user import User

class MovieBase(SQLModel):
    title: str
    description: str
    genre: str
    release_year: int
    director: str
    cast: str  # comma separated names
    poster_url: str
    trailer_url: str

class Movie(MovieBase, table=True):
    __tablename__ = "movies"

    id: Optional[int] = Field(default=None, primary_key=True)
    # no FK on role: the creator check happens when the row is inserted
    creator_id: str = Field(foreign_key="users.id", nullable=False, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    creator: Optional["User"] = Relationship(back_populates="movies")
