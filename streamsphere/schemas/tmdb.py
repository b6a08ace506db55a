# streamsphere/schemas/tmdb.py
from enum import Enum
from typing import List, Optional

from streamsphere.schemas.base import CamelModel

class ExternalMovie(CamelModel):
    id: int
    title: str
    description: str
    poster_url: str
    backdrop_url: str
    release_year: int
    release_date: str
    rating: float
    vote_count: int
    genre_ids: List[int]
    popularity: float
    language: str

class ExternalMoviePage(CamelModel):
    movies: List[ExternalMovie]
    page: int
    total_pages: int
    total_results: int

class ExternalMovieDetails(CamelModel):
    id: int
    title: str
    overview: str
    poster_url: str
    backdrop_url: str
    release_date: str
    rating: float
    vote_count: int
    runtime: int
    genres: List[str]
    director: str
    cast: List[str]
    trailer_key: Optional[str] = None
    trailer_url: Optional[str] = None

class Genre(CamelModel):
    id: int
    name: str

class GenreList(CamelModel):
    genres: List[Genre]

class MediaType(str, Enum):
    MOVIE = "movie"
    TV    = "tv"
