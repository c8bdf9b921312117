"""
Pydantic schemas for API request/response validation.
"""

from movie_api.api.models.movie import (
    BoxOffice,
    BoxOfficeRevenue,
    MovieCreate,
    MoviePage,
    MovieResponse,
)
from movie_api.api.models.rating import (
    VALID_RATINGS,
    RatingAggregateResponse,
    RatingResponse,
    RatingSubmit,
)

__all__ = [
    "BoxOffice",
    "BoxOfficeRevenue",
    "MovieCreate",
    "MoviePage",
    "MovieResponse",
    "VALID_RATINGS",
    "RatingAggregateResponse",
    "RatingResponse",
    "RatingSubmit",
]
