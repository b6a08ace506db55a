from typing import List, Optional
from sqlmodel import Session, select, col, and_, or_
from streamsphere.models.movie import Movie

MAX_PAGE_SIZE = 100

def create_movie(db: Session, movie: Movie) -> Movie:
    db.add(movie)
    db.commit()
    db.refresh(movie)
    return movie

def list_movies(
    db: Session,
    *,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    creator_id: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> List[Movie]:
    """
    Newest first. ``search`` matches title, director or cast and ``genre``
    matches the genre text, both as case-insensitive substrings. All given
    filters must hold.
    """
    conditions = []
    if creator_id is not None:
        conditions.append(Movie.creator_id == creator_id)
    if search:
        conditions.append(
            or_(
                col(Movie.title).icontains(search, autoescape=True),
                col(Movie.director).icontains(search, autoescape=True),
                col(Movie.cast).icontains(search, autoescape=True),
            )
        )
    if genre:
        conditions.append(col(Movie.genre).icontains(genre, autoescape=True))

    stmt = select(Movie)
    if conditions:
        stmt = stmt.where(and_(*conditions))
    stmt = (
        stmt.order_by(col(Movie.created_at).desc(), col(Movie.id).desc())
        .offset(offset)
        .limit(min(limit, MAX_PAGE_SIZE))
    )
    return db.exec(stmt).all()
