# streamsphere/schemas/movie.py
from typing import Any, Dict
from datetime import date, datetime
from pydantic import BaseModel

from streamsphere.core.errors import ValidationFailed
from streamsphere.schemas.base import CamelModel

MIN_RELEASE_YEAR = 1800
# how far past the current year an announced release may be dated
RELEASE_YEAR_LEAD = 2

# (wire key, attribute, error code, label) in the order they are checked;
# releaseYear sits between genre and director
_TEXT_FIELDS_BEFORE_YEAR = (
    ("title", "title", "INVALID_TITLE", "Title"),
    ("description", "description", "INVALID_DESCRIPTION", "Description"),
    ("genre", "genre", "INVALID_GENRE", "Genre"),
)
_TEXT_FIELDS_AFTER_YEAR = (
    ("director", "director", "INVALID_DIRECTOR", "Director"),
    ("cast", "cast", "INVALID_CAST", "Cast"),
    ("posterUrl", "poster_url", "INVALID_POSTER_URL", "Poster URL"),
    ("trailerUrl", "trailer_url", "INVALID_TRAILER_URL", "Trailer URL"),
)


def max_release_year() -> int:
    return date.today().year + RELEASE_YEAR_LEAD


def _required_text(body: Dict[str, Any], key: str, code: str, label: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f"{label} is required and must be a non-empty string", code)
    return value.strip()


def _release_year(body: Dict[str, Any]) -> int:
    value = body.get("releaseYear")
    # bool is an int subclass; JSON true is not a year
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        raise ValidationFailed("Release year is required and must be a valid number", "INVALID_RELEASE_YEAR")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationFailed("Release year is required and must be a valid number", "INVALID_RELEASE_YEAR")
    latest = max_release_year()
    if value < MIN_RELEASE_YEAR or value > latest:
        raise ValidationFailed(
            f"Release year must be between {MIN_RELEASE_YEAR} and {latest}",
            "RELEASE_YEAR_OUT_OF_RANGE",
        )
    return int(value)


class MovieCreate(BaseModel):
    title: str
    description: str
    genre: str
    release_year: int
    director: str
    cast: str
    poster_url: str
    trailer_url: str

    @classmethod
    def parse(cls, body: Dict[str, Any]) -> "MovieCreate":
        """
        Validate a raw JSON body field by field, stopping at the first
        failure. Text fields come back trimmed.
        """
        if "creatorId" in body:
            raise ValidationFailed("Creator ID cannot be provided in request body", "CREATOR_ID_NOT_ALLOWED")

        values: Dict[str, Any] = {}
        for key, attr, code, label in _TEXT_FIELDS_BEFORE_YEAR:
            values[attr] = _required_text(body, key, code, label)
        values["release_year"] = _release_year(body)
        for key, attr, code, label in _TEXT_FIELDS_AFTER_YEAR:
            values[attr] = _required_text(body, key, code, label)
        return cls(**values)


class MovieRead(CamelModel):
    id: int
    title: str
    description: str
    genre: str
    release_year: int
    director: str
    cast: str
    poster_url: str
    trailer_url: str
    creator_id: str
    created_at: datetime
    updated_at: datetime
