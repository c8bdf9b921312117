"""
Pydantic schemas for Movie API.
"""

import logging
import re
from datetime import datetime

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from movie_api.database.models import Movie

logger = logging.getLogger(__name__)

RELEASE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class BoxOfficeRevenue(CamelModel):
    """Revenue figures of a box-office snapshot."""

    worldwide: int = 0
    opening_weekend_usa: int = 0


class BoxOffice(CamelModel):
    """Box-office snapshot attached to a movie by enrichment."""

    revenue: BoxOfficeRevenue
    currency: str
    source: str
    last_updated: datetime


class MovieCreate(CamelModel):
    """Request body for creating a movie."""

    title: str = Field(..., min_length=1, max_length=255)
    genre: str = Field(..., min_length=1, max_length=100)
    release_date: str
    distributor: str | None = Field(None, max_length=255)
    budget: int | None = Field(None, ge=-(2**63), le=2**63 - 1)
    mpa_rating: str | None = Field(None, max_length=10)

    @field_validator("release_date")
    @classmethod
    def check_release_date(cls, value: str) -> str:
        if not RELEASE_DATE_PATTERN.match(value):
            raise ValueError("releaseDate must use the YYYY-MM-DD format")
        # strptime rejects impossible dates such as 2024-13-40
        datetime.strptime(value, "%Y-%m-%d")
        return value


class MovieResponse(CamelModel):
    """Response model for a single movie."""

    id: str
    title: str
    release_date: str
    genre: str
    distributor: str | None = None
    budget: int | None = None
    mpa_rating: str | None = None
    box_office: BoxOffice | None = None

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieResponse":
        """Build the response from an ORM movie, dropping unreadable box-office data."""
        box_office = None
        if movie.box_office is not None:
            try:
                box_office = BoxOffice.model_validate(movie.box_office)
            except ValidationError:
                logger.debug("Ignoring malformed box office data for %r", movie.title)
        return cls(
            id=movie.id,
            title=movie.title,
            release_date=movie.release_date.isoformat(),
            genre=movie.genre,
            distributor=movie.distributor,
            budget=movie.budget,
            mpa_rating=movie.mpa_rating,
            box_office=box_office,
        )


class MoviePage(CamelModel):
    """Response model for one page of search results."""

    items: list[MovieResponse]
    next_cursor: str | None = None
