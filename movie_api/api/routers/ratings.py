"""
Rating API endpoints.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from movie_api.api.config import get_base_url
from movie_api.api.dependencies import get_db, get_rater_id
from movie_api.api.errors import NotFoundError
from movie_api.api.models.rating import RatingAggregateResponse, RatingResponse, RatingSubmit
from movie_api.database import crud

router = APIRouter(prefix="/movies", tags=["ratings"])


def _ensure_movie_exists(db: Session, title: str) -> None:
    try:
        crud.get_movie_by_title(db, title)
    except crud.MovieNotFoundError:
        raise NotFoundError("Movie not found")


@router.post("/{title}/ratings", response_model=RatingResponse, status_code=201)
def submit_rating(
    title: str,
    rating_in: RatingSubmit,
    response: Response,
    rater_id: str = Depends(get_rater_id),
    db: Session = Depends(get_db),
):
    """Add a rating, or replace the rater's previous rating (200)."""
    _ensure_movie_exists(db, title)
    rating, created = crud.upsert_rating(
        db,
        movie_title=title,
        rater_id=rater_id,
        rating=rating_in.rating,
    )
    if created:
        response.headers["Location"] = f"{get_base_url()}/movies/{quote(title, safe='')}/ratings"
    else:
        response.status_code = 200
    return RatingResponse(
        movie_title=rating.movie_title,
        rater_id=rating.rater_id,
        rating=rating.rating,
    )


@router.get("/{title}/rating", response_model=RatingAggregateResponse)
def get_rating_aggregate(title: str, db: Session = Depends(get_db)):
    """Get average rating and rating count for a movie."""
    _ensure_movie_exists(db, title)
    return crud.get_rating_aggregate(db, title)
