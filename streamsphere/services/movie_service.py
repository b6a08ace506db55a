import logging
from typing import Any, Dict, List, Optional

from sqlmodel import Session
from streamsphere.models.movie import Movie
from streamsphere.models.user import UserRole
from streamsphere.repositories.movie_repo import create_movie as repo_create_movie, list_movies
from streamsphere.schemas.movie import MovieCreate, MovieRead
from streamsphere.core.errors import Forbidden
from streamsphere.core.security import SessionContext
from streamsphere.services.user_service import load_user

logger = logging.getLogger(__name__)


def create_movie(db: Session, session: SessionContext, body: Dict[str, Any]) -> MovieRead:
    # roles change while tokens live, so ask the store
    user = load_user(db, session)
    if user.role != UserRole.CREATOR:
        raise Forbidden("Only creators can create movies", "FORBIDDEN")

    movie_in = MovieCreate.parse(body)
    movie = repo_create_movie(db, Movie(**movie_in.model_dump(), creator_id=user.id))
    logger.info("creator %s published movie %s", user.id, movie.id)
    return MovieRead.model_validate(movie)


def list_public_movies(
    db: Session,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> List[MovieRead]:
    movies = list_movies(db, search=search, genre=genre, limit=limit, offset=offset)
    return [MovieRead.model_validate(m) for m in movies]


def list_my_movies(
    db: Session,
    session: SessionContext,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> List[MovieRead]:
    movies = list_movies(
        db,
        creator_id=session.user_id,
        search=search,
        genre=genre,
        limit=limit,
        offset=offset,
    )
    return [MovieRead.model_validate(m) for m in movies]
