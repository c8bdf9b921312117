"""
Database connection management using SQLAlchemy.

This module handles engine creation with a bounded connection pool, session
management, and provides utilities for database operations.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from movie_api.database.models import Base

logger = logging.getLogger(__name__)


DEFAULT_DATABASE_URL = "sqlite:///data/movies.db"


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    db_dir = os.path.dirname(url.database)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, session management, and database initialization.
    """

    def __init__(
        self,
        database_url: str = DEFAULT_DATABASE_URL,
        echo: bool = False,
        max_open: int = 100,
        max_idle: int = 10,
        max_lifetime: int = 3600,
    ):
        """
        Initialize database manager.

        Args:
            database_url: SQLAlchemy database URL
            echo: If True, log all SQL statements (useful for debugging)
            max_open: Maximum number of concurrently open connections
            max_idle: Number of connections kept open in the pool
            max_lifetime: Seconds after which a pooled connection is recycled
        """
        self.database_url = database_url
        url = make_url(database_url)

        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # A single shared connection keeps the in-memory database alive
            self.engine = create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool
            )
        else:
            connect_args = {}
            if url.get_backend_name() == "sqlite":
                _ensure_sqlite_directory(database_url)
                connect_args["check_same_thread"] = False
            pool_size = max(1, min(max_idle, max_open))
            self.engine = create_engine(
                database_url,
                echo=echo,
                connect_args=connect_args,
                pool_size=pool_size,
                max_overflow=max(0, max_open - pool_size),
                pool_recycle=max_lifetime,
                pool_pre_ping=True
            )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        """
        Create all tables defined in the models.

        This creates tables if they don't exist. Existing tables are not modified.
        """
        Base.metadata.create_all(bind=self.engine)

    def get_session(self) -> Session:
        """Get a new database session. The caller is responsible for closing it."""
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Automatically commits on success and rolls back on failure.

        Usage:
            with db_manager.session_scope() as session:
                session.add(movie)

        Yields:
            SQLAlchemy Session object
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        """
        Check database connectivity.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached
        """
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()


# Global database manager instance (singleton pattern)
_db_manager: Optional[DatabaseManager] = None


def get_db_manager(
    database_url: str = DEFAULT_DATABASE_URL,
    echo: bool = False,
    max_open: int = 100,
    max_idle: int = 10,
    max_lifetime: int = 3600,
) -> DatabaseManager:
    """
    Get or create the global database manager instance.

    Arguments are only used when the instance is first created.

    Returns:
        DatabaseManager instance
    """
    global _db_manager
    if _db_manager is None:
        logger.info("Connecting to database %s", make_url(database_url).render_as_string(hide_password=True))
        _db_manager = DatabaseManager(
            database_url=database_url,
            echo=echo,
            max_open=max_open,
            max_idle=max_idle,
            max_lifetime=max_lifetime,
        )
    return _db_manager
