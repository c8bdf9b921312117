"""
SQLAlchemy ORM models for the movie catalog database.

This module defines the Movie and Rating tables. Box-office figures are kept
denormalized on the movie row as serialized JSON text.
"""

import json
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional
from sqlalchemy import (
    BigInteger, Date, Float, String, Text, TIMESTAMP,
    CheckConstraint, UniqueConstraint, Index
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    """Generate a new primary key value."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Movie(Base):
    """
    Movie table storing catalog metadata.

    Attributes:
        id: Primary key, UUID string
        title: Movie title (required, unique)
        release_date: Release date
        genre: Genre (required)
        distributor: Distributor name (optional)
        budget: Production budget (optional)
        mpa_rating: MPA content rating code such as 'PG-13' (optional)
        box_office_data: Box-office snapshot as JSON text (optional)
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """
    __tablename__ = 'movies'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    distributor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    budget: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    mpa_rating: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    box_office_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        default=utcnow,
        onupdate=utcnow
    )

    __table_args__ = (
        UniqueConstraint('title', name='unique_movie_title'),
        Index('idx_movies_created', 'created_at'),
    )

    @property
    def box_office(self) -> Optional[Dict[str, Any]]:
        """Deserialized box-office snapshot, or None if absent or malformed."""
        if not self.box_office_data:
            return None
        try:
            data = json.loads(self.box_office_data)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def __repr__(self) -> str:
        return f"<Movie(id='{self.id}', title='{self.title}', release_date={self.release_date})>"


class Rating(Base):
    """
    Rating table storing rater scores for movies.

    Movies are referenced by title value rather than a foreign key.

    Attributes:
        id: Primary key, UUID string
        movie_title: Title of the rated movie
        rater_id: Opaque rater identity (X-Rater-Id header)
        rating: Rating value (0.5 to 5.0 in half steps)
        created_at: Timestamp when rating was created
        updated_at: Timestamp when rating was last updated
    """
    __tablename__ = 'ratings'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    movie_title: Mapped[str] = mapped_column(String(255), nullable=False)
    rater_id: Mapped[str] = mapped_column(String(255), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        default=utcnow,
        onupdate=utcnow
    )

    __table_args__ = (
        CheckConstraint("rating >= 0.5 AND rating <= 5", name='check_rating_range'),
        UniqueConstraint('movie_title', 'rater_id', name='unique_movie_rater'),
        Index('idx_ratings_movie', 'movie_title'),
    )

    def __repr__(self) -> str:
        return f"<Rating(id='{self.id}', movie_title='{self.movie_title}', rater_id='{self.rater_id}', rating={self.rating})>"
