"""
Movie API endpoints.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from movie_api.api.config import get_base_url
from movie_api.api.dependencies import get_db, get_enrichment_queue
from movie_api.api.errors import ConflictError
from movie_api.api.models.movie import MovieCreate, MoviePage, MovieResponse
from movie_api.database import crud
from movie_api.services.enrichment import EnrichmentQueue

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["movies"])

DEFAULT_PAGE_SIZE = 10


def _parse_int(value: str | None) -> int | None:
    """Parse an optional 64-bit integer query parameter, ignoring bad input."""
    if not value:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    if not -crud.SQL_INT_MAX - 1 <= number <= crud.SQL_INT_MAX:
        return None
    return number


@router.get("", response_model=MoviePage)
def search_movies(
    q: str | None = Query(None),
    genre: str | None = Query(None),
    year: str | None = Query(None),
    distributor: str | None = Query(None),
    budget: str | None = Query(None),
    mpa_rating: str | None = Query(None, alias="mpaRating"),
    limit: str | None = Query(None),
    cursor: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """Search movies, newest first, with cursor pagination."""
    filters = crud.MovieFilters(
        q=q,
        genre=genre,
        year=_parse_int(year),
        distributor=distributor,
        max_budget=_parse_int(budget),
        mpa_rating=mpa_rating,
    )
    page_size = _parse_int(limit)
    if not page_size or page_size <= 0:
        page_size = DEFAULT_PAGE_SIZE

    movies, next_cursor = crud.search_movies(db, filters=filters, limit=page_size, cursor=cursor)
    return MoviePage(
        items=[MovieResponse.from_movie(m) for m in movies],
        next_cursor=next_cursor,
    )


@router.post("", response_model=MovieResponse, status_code=201)
def create_movie(
    movie_in: MovieCreate,
    response: Response,
    db: Session = Depends(get_db),
    enrichment: EnrichmentQueue = Depends(get_enrichment_queue),
):
    """Create a movie and queue its box-office enrichment."""
    try:
        movie = crud.create_movie(
            db,
            title=movie_in.title,
            genre=movie_in.genre,
            release_date=movie_in.release_date,
            distributor=movie_in.distributor,
            budget=movie_in.budget,
            mpa_rating=movie_in.mpa_rating,
        )
    except crud.DuplicateMovieError:
        raise ConflictError("Movie with this title already exists")

    logger.info("Created movie %r (%s)", movie.title, movie.id)
    enrichment.submit(movie.title)

    response.headers["Location"] = f"{get_base_url()}/movies/{quote(movie.title, safe='')}"
    return MovieResponse.from_movie(movie)
