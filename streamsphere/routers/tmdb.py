# streamsphere/routers/tmdb.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query
from streamsphere.schemas.tmdb import (
    ExternalMovie,
    ExternalMovieDetails,
    ExternalMoviePage,
    GenreList,
    MediaType,
)
from streamsphere.services.tmdb_service import DEFAULT_SORT, TMDBClient, get_tmdb_client

router = APIRouter(prefix="/tmdb", tags=["tmdb"])


@router.get("", response_model=ExternalMoviePage)
async def browse_movies(
    page: int = Query(1, ge=1),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    search: Optional[str] = Query(None),
    genre: Optional[str] = Query(None, description="TMDB genre id"),
    tmdb: TMDBClient = Depends(get_tmdb_client),
):
    """
    Browse the external catalog. A non-empty ``search`` switches to TMDB's
    search endpoint and ``sortBy``/``genre`` are ignored.
    """
    return await tmdb.fetch_movies(page=page, sort_by=sort_by, search=search, genre=genre)


@router.get("/genres", response_model=GenreList)
async def list_genres(tmdb: TMDBClient = Depends(get_tmdb_client)):
    return await tmdb.fetch_genres()


@router.get("/trending/{media_type}", response_model=List[ExternalMovie])
async def list_trending(
    media_type: MediaType,
    limit: int = Query(10, ge=1, le=20),
    tmdb: TMDBClient = Depends(get_tmdb_client),
):
    return await tmdb.fetch_trending(media_type.value, limit)


@router.get("/{media_type}/{tmdb_id}", response_model=ExternalMovieDetails)
async def read_details(
    media_type: MediaType,
    tmdb_id: int = Path(..., description="TMDB id of the movie or show"),
    tmdb: TMDBClient = Depends(get_tmdb_client),
):
    """
    Details, trailer, director and top-billed cast in one payload.
    """
    return await tmdb.fetch_details(media_type.value, tmdb_id)
