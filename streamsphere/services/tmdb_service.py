"""
Thin async client over the TMDB v3 API that reshapes its payloads into
the catalog's ExternalMovie / ExternalMovieDetails schemas.

Nothing is cached and nothing is retried: every call goes upstream and any
failure surfaces as an ``UpstreamError``.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from streamsphere.core.config import settings
from streamsphere.core.errors import UpstreamError
from streamsphere.schemas.tmdb import (
    ExternalMovie,
    ExternalMovieDetails,
    ExternalMoviePage,
    Genre,
    GenreList,
)

logger = logging.getLogger(__name__)

DEFAULT_SORT = "popularity.desc"
TOP_CAST = 5
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{key}"

# failed calls, bad JSON and payloads that are missing fields or
# don't fit the schemas (pydantic errors are ValueErrors)
UPSTREAM_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)

# grey 280x300 "No Image" card
FALLBACK_IMAGE_URL = (
    "data:image/svg+xml;base64,PHN2ZyB3aWR0aD0iMjgwIiBoZWlnaHQ9IjMwMCIgdmlld0JveD0iMCAwIDI4MC"
    "AzMDAiIGZpbGw9Im5vbmUiIHhtbG5zPSJodHRwOi8vd3d3LnczLm9yZy8yMDAwL3N2ZyI+CjxyZWN0IHdpZHRoPSIy"
    "ODAiIGhlaWdodD0iMzAwIiBmaWxsPSIjMzMzIi8+Cjx0ZXh0IHg9IjE0MCIgeT0iMTUwIiBmaWxsPSIjNjY2IiB0ZX"
    "h0LWFuY2hvcj0ibWlkZGxlIiBkeT0iLjNlbSI+Tm8gSW1hZ2U8L3RleHQ+Cjwvc3ZnPg=="
)


def image_url(path: Optional[str], base: Optional[str] = None) -> str:
    if not path:
        return FALLBACK_IMAGE_URL
    return f"{base or settings.TMDB_IMAGE_BASE_URL}{path}"


def release_year(release_date: Optional[str]) -> int:
    if not release_date:
        return 0
    try:
        return int(release_date[:4])
    except ValueError:
        return 0


def to_external_movie(raw: Dict[str, Any]) -> ExternalMovie:
    # tv results use name/first_air_date instead of title/release_date
    date = raw.get("release_date") or raw.get("first_air_date") or ""
    return ExternalMovie(
        id=raw["id"],
        title=raw.get("title") or raw.get("name") or "",
        description=raw.get("overview") or "No description available",
        poster_url=image_url(raw.get("poster_path")),
        backdrop_url=image_url(raw.get("backdrop_path")),
        release_year=release_year(date),
        release_date=date,
        rating=raw.get("vote_average") or 0,
        vote_count=raw.get("vote_count") or 0,
        genre_ids=raw.get("genre_ids") or [],
        popularity=raw.get("popularity") or 0,
        language=raw.get("original_language") or "en",
    )


def pick_trailer(videos: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    First YouTube video typed "Trailer", else the first YouTube video of
    any type.
    """
    youtube = [v for v in videos if v.get("site") == "YouTube"]
    for video in youtube:
        if video.get("type") == "Trailer":
            return video
    return youtube[0] if youtube else None


def pick_director(crew: List[Dict[str, Any]]) -> str:
    for member in crew:
        if member.get("job") == "Director":
            return member.get("name") or "Unknown"
    return "Unknown"


def to_movie_details(
    details: Dict[str, Any], videos: Dict[str, Any], credits: Dict[str, Any]
) -> ExternalMovieDetails:
    trailer = pick_trailer(videos.get("results") or [])
    trailer_key = trailer.get("key") if trailer else None
    runtime = details.get("runtime")
    if runtime is None:
        episode_runtimes = details.get("episode_run_time") or []
        runtime = episode_runtimes[0] if episode_runtimes else 0

    return ExternalMovieDetails(
        id=details["id"],
        title=details.get("title") or details.get("name") or "",
        overview=details.get("overview") or "No description available",
        poster_url=image_url(details.get("poster_path")),
        backdrop_url=image_url(details.get("backdrop_path"), settings.TMDB_BACKDROP_BASE_URL),
        release_date=details.get("release_date") or details.get("first_air_date") or "",
        rating=details.get("vote_average") or 0,
        vote_count=details.get("vote_count") or 0,
        runtime=runtime or 0,
        genres=[g["name"] for g in details.get("genres") or [] if g.get("name")],
        director=pick_director(credits.get("crew") or []),
        cast=[c.get("name", "") for c in (credits.get("cast") or [])[:TOP_CAST]],
        trailer_key=trailer_key,
        trailer_url=YOUTUBE_EMBED_URL.format(key=trailer_key) if trailer_key else None,
    )


class TMDBClient:
    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self.http = http
        self.api_key = api_key

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        query = {"api_key": self.api_key}
        query.update(params or {})
        response = await self.http.get(path, params=query)
        response.raise_for_status()
        return response.json()

    async def fetch_movies(
        self,
        page: int = 1,
        sort_by: str = DEFAULT_SORT,
        search: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> ExternalMoviePage:
        """
        Free-text search when ``search`` is given (sort and genre are then
        ignored), otherwise discover with sorting and an optional genre.
        """
        if search:
            path = "/search/movie"
            params: Dict[str, Any] = {"query": search, "page": page, "include_adult": "false"}
        else:
            path = "/discover/movie"
            params = {"sort_by": sort_by or DEFAULT_SORT, "page": page, "include_adult": "false"}
            if genre:
                params["with_genres"] = genre

        try:
            data = await self._get(path, params)
            return ExternalMoviePage(
                movies=[to_external_movie(m) for m in data.get("results") or []],
                page=data.get("page") or page,
                total_pages=data.get("total_pages") or 0,
                total_results=data.get("total_results") or 0,
            )
        except UPSTREAM_ERRORS as e:
            logger.error("Error fetching TMDB movies: %s", e)
            raise UpstreamError("Failed to fetch movies from TMDB")

    async def fetch_details(self, media_type: str, tmdb_id: int) -> ExternalMovieDetails:
        base = f"/{media_type}/{tmdb_id}"
        tasks = [
            asyncio.ensure_future(self._get(path))
            for path in (base, f"{base}/videos", f"{base}/credits")
        ]
        try:
            details, videos, credits = await asyncio.gather(*tasks)
            return to_movie_details(details, videos, credits)
        except UPSTREAM_ERRORS as e:
            logger.error("Error loading TMDB %s %s details: %s", media_type, tmdb_id, e)
            raise UpstreamError("Failed to load movie details")
        finally:
            # one failed call must not leave its siblings running on a client
            # that is about to be closed
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def fetch_genres(self) -> GenreList:
        try:
            data = await self._get("/genre/movie/list")
            return GenreList(genres=[Genre(id=g["id"], name=g["name"]) for g in data.get("genres") or []])
        except UPSTREAM_ERRORS as e:
            logger.error("Error loading TMDB genres: %s", e)
            raise UpstreamError("Failed to load genres")

    async def fetch_trending(self, media_type: str, limit: int) -> List[ExternalMovie]:
        try:
            data = await self._get(f"/trending/{media_type}/week")
            return [to_external_movie(m) for m in (data.get("results") or [])[:limit]]
        except UPSTREAM_ERRORS as e:
            logger.error("Error loading trending %s: %s", media_type, e)
            raise UpstreamError("Failed to load trending titles")


async def get_tmdb_client():
    async with httpx.AsyncClient(
        base_url=settings.TMDB_BASE_URL,
        timeout=settings.TMDB_TIMEOUT_SECONDS,
    ) as http:
        yield TMDBClient(http, settings.TMDB_API_KEY)
