"""
CRUD operations for Movie and Rating models.

This module provides movie creation and lookup, box-office write-back,
rating upsert and aggregation, and filtered cursor-paginated movie search.
"""

import base64
import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import and_, extract, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from movie_api.database.models import Movie, Rating

CURSOR_PREFIX = "offset_"
RELEASE_DATE_FORMAT = "%Y-%m-%d"
# Largest value an INTEGER column or LIMIT/OFFSET clause accepts
SQL_INT_MAX = 2**63 - 1


class MovieNotFoundError(LookupError):
    """Raised when no movie matches the requested title."""


class DuplicateMovieError(ValueError):
    """Raised when a movie with the same title already exists."""


@dataclass
class MovieFilters:
    """
    Optional, conjunctive search filters.

    Empty strings and zero values are treated as "not set".
    """
    q: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    distributor: Optional[str] = None
    max_budget: Optional[int] = None
    mpa_rating: Optional[str] = None


# ==================== MOVIE CRUD OPERATIONS ====================

def create_movie(
    session: Session,
    title: str,
    genre: str,
    release_date: str,
    distributor: Optional[str] = None,
    budget: Optional[int] = None,
    mpa_rating: Optional[str] = None
) -> Movie:
    """
    Create a new movie.

    Args:
        session: Database session
        title: Movie title (must be unique)
        genre: Genre
        release_date: Release date in YYYY-MM-DD format
        distributor: Distributor name (optional)
        budget: Budget (optional)
        mpa_rating: MPA rating code (optional)

    Returns:
        Created Movie object

    Raises:
        ValueError: If release_date is not a YYYY-MM-DD calendar date
        DuplicateMovieError: If a movie with this title already exists
    """
    movie = Movie(
        title=title,
        genre=genre,
        release_date=datetime.strptime(release_date, RELEASE_DATE_FORMAT).date(),
        distributor=distributor,
        budget=budget,
        mpa_rating=mpa_rating
    )
    session.add(movie)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise DuplicateMovieError(f"Movie with title '{title}' already exists") from e
    session.refresh(movie)
    return movie


def get_movie_by_title(session: Session, title: str) -> Movie:
    """
    Get a movie by exact title.

    Args:
        session: Database session
        title: Movie title

    Returns:
        Movie object

    Raises:
        MovieNotFoundError: If no movie has this title
    """
    movie = session.query(Movie).filter(Movie.title == title).first()
    if movie is None:
        raise MovieNotFoundError(title)
    return movie


def update_movie_box_office(
    session: Session,
    title: str,
    box_office: Dict[str, Any]
) -> int:
    """
    Overwrite the stored box-office snapshot of a movie.

    Args:
        session: Database session
        title: Movie title
        box_office: JSON-serializable box-office snapshot

    Returns:
        Number of rows updated (0 when no movie has this title)
    """
    updated = session.query(Movie).filter(Movie.title == title).update(
        {Movie.box_office_data: json.dumps(box_office)},
        synchronize_session=False
    )
    session.commit()
    return updated


def encode_cursor(offset: int) -> str:
    """Encode a result offset as an opaque cursor token."""
    return base64.urlsafe_b64encode(f"{CURSOR_PREFIX}{offset}".encode()).decode()


def decode_cursor(cursor: Optional[str]) -> int:
    """
    Decode a cursor token into a result offset.

    Malformed tokens and offsets beyond SQL_INT_MAX decode to offset 0.
    """
    if not cursor:
        return 0
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except ValueError:
        return 0
    if not raw.startswith(CURSOR_PREFIX):
        return 0
    try:
        offset = int(raw[len(CURSOR_PREFIX):])
    except ValueError:
        return 0
    if offset > SQL_INT_MAX:
        return 0
    return max(offset, 0)


def search_movies(
    session: Session,
    filters: Optional[MovieFilters] = None,
    limit: int = 10,
    cursor: Optional[str] = None
) -> Tuple[List[Movie], Optional[str]]:
    """
    Search for movies, newest first, one page at a time.

    Args:
        session: Database session
        filters: Optional search filters
        limit: Page size
        cursor: Cursor token returned by a previous page (optional)

    Returns:
        Tuple of (movies on this page, cursor for the next page or None)
    """
    filters = filters or MovieFilters()
    query = session.query(Movie)

    if filters.q:
        query = query.filter(Movie.title.ilike(f"%{filters.q}%"))

    if filters.genre:
        query = query.filter(Movie.genre.like(filters.genre))

    if filters.year:
        query = query.filter(extract('year', Movie.release_date) == filters.year)

    if filters.distributor:
        query = query.filter(Movie.distributor.like(filters.distributor))

    if filters.max_budget:
        query = query.filter(Movie.budget <= filters.max_budget)

    if filters.mpa_rating:
        query = query.filter(Movie.mpa_rating == filters.mpa_rating)

    offset = decode_cursor(cursor)
    movies = query.order_by(
        Movie.created_at.desc(), Movie.id.desc()
    ).offset(offset).limit(min(limit + 1, SQL_INT_MAX)).all()

    next_cursor = None
    if len(movies) > limit:
        movies = movies[:limit]
        next_cursor = encode_cursor(offset + limit)

    return movies, next_cursor


# ==================== RATING CRUD OPERATIONS ====================

def get_rating(
    session: Session,
    movie_title: str,
    rater_id: str
) -> Optional[Rating]:
    """
    Get a rating by movie title and rater.

    Args:
        session: Database session
        movie_title: Movie title
        rater_id: Rater identity

    Returns:
        Rating object or None if not found
    """
    return session.query(Rating).filter(
        and_(Rating.movie_title == movie_title, Rating.rater_id == rater_id)
    ).first()


def upsert_rating(
    session: Session,
    movie_title: str,
    rater_id: str,
    rating: float
) -> Tuple[Rating, bool]:
    """
    Create a rating, or update the rater's existing rating for the movie.

    Updating keeps the rating's id and creation time.

    Args:
        session: Database session
        movie_title: Movie title
        rater_id: Rater identity
        rating: Rating value

    Returns:
        Tuple of (Rating object, True if created / False if updated)
    """
    existing = get_rating(session, movie_title, rater_id)

    if existing is None:
        rating_obj = Rating(
            movie_title=movie_title,
            rater_id=rater_id,
            rating=rating
        )
        session.add(rating_obj)
        try:
            session.commit()
        except IntegrityError:
            # Lost a race with a concurrent first submission
            session.rollback()
            existing = get_rating(session, movie_title, rater_id)
            if existing is None:
                raise
        else:
            session.refresh(rating_obj)
            return rating_obj, True

    existing.rating = rating
    session.commit()
    session.refresh(existing)
    return existing, False


def _round_average(value: Any) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def get_rating_aggregate(session: Session, movie_title: str) -> Dict[str, Any]:
    """
    Get rating statistics for a movie.

    Args:
        session: Database session
        movie_title: Movie title

    Returns:
        Dictionary with statistics:
        - average: Average rating rounded to one decimal (0.0 if unrated)
        - count: Number of ratings
    """
    stats = session.query(
        func.count(Rating.id).label('count'),
        func.avg(Rating.rating).label('average')
    ).filter(Rating.movie_title == movie_title).first()

    count = stats.count or 0
    return {
        'average': _round_average(stats.average) if count else 0.0,
        'count': count
    }
