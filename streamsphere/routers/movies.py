# streamsphere/routers/movies.py
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlmodel import Session
from streamsphere.database import get_db
from streamsphere.core.security import SessionContext, get_current_session
from streamsphere.repositories.movie_repo import MAX_PAGE_SIZE
from streamsphere.schemas.movie import MovieRead
from streamsphere.services.movie_service import (
    create_movie as svc_create_movie,
    list_public_movies,
    list_my_movies as svc_list_my_movies,
)

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get(
    "",
    response_model=List[MovieRead],
    status_code=status.HTTP_200_OK,
    summary="List community movies",
)
def list_movies(
    search: Optional[str] = Query(None, description="Substring of title, director or cast"),
    genre: Optional[str] = Query(None, description="Substring of the genre"),
    limit: int = Query(10, ge=1, description=f"Page size, capped at {MAX_PAGE_SIZE}"),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Public listing of every community movie, newest first.
    """
    return list_public_movies(db, search, genre, limit, offset)


@router.post(
    "",
    response_model=MovieRead,
    status_code=status.HTTP_201_CREATED,
)
def create_movie(
    body: Dict[str, Any] = Body(...),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Publish a movie as the authenticated creator. The owner is always the
    caller; a body that names ``creatorId`` is rejected.
    """
    return svc_create_movie(db, session, body)


@router.get(
    "/my-movies",
    response_model=List[MovieRead],
    status_code=status.HTTP_200_OK,
    summary="List the caller's own movies",
)
def list_my_movies(
    search: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    limit: int = Query(10, ge=1),
    offset: int = Query(0, ge=0),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return svc_list_my_movies(db, session, search, genre, limit, offset)
