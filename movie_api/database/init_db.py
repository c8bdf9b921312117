"""
Database initialization and schema creation.
"""

import logging

from sqlalchemy import inspect

from movie_api.database.connection import DatabaseManager

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'movies', 'ratings'}


def init_database(db_manager: DatabaseManager) -> DatabaseManager:
    """
    Create any missing tables. Existing tables and their data are left alone.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        DatabaseManager instance
    """
    db_manager.create_tables()
    logger.info("Database migrations completed successfully")
    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = EXPECTED_TABLES - existing_tables
    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False
    return True
