"""
Database module for the movie catalog.

This module provides database models, connection management, and CRUD operations
using SQLAlchemy ORM.
"""

from movie_api.database.models import Base, Movie, Rating
from movie_api.database.connection import DatabaseManager, get_db_manager
from movie_api.database.init_db import init_database, verify_schema
from movie_api.database import crud

__all__ = [
    # Models
    'Base',
    'Movie',
    'Rating',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
