"""
Pydantic schemas for Rating API.
"""

from pydantic import Field, field_validator

from movie_api.api.models.movie import CamelModel

VALID_RATINGS = (0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0)


class RatingSubmit(CamelModel):
    """Request body for submitting a rating."""

    rating: float = Field(..., strict=True)

    @field_validator("rating")
    @classmethod
    def check_rating(cls, value: float) -> float:
        if value not in VALID_RATINGS:
            raise ValueError(
                "Rating must be one of: " + ", ".join(str(v) for v in VALID_RATINGS)
            )
        return value


class RatingResponse(CamelModel):
    """Response model for a submitted rating."""

    movie_title: str
    rater_id: str
    rating: float


class RatingAggregateResponse(CamelModel):
    """Response model for rating statistics of a movie."""

    average: float
    count: int
