"""
FastAPI dependency injection for database access, enrichment and rater identity.
"""

import logging
from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from movie_api.api import config
from movie_api.api.errors import UnauthorizedError
from movie_api.database.connection import DatabaseManager, get_db_manager
from movie_api.services.boxoffice import BoxOfficeClient
from movie_api.services.enrichment import EnrichmentQueue

logger = logging.getLogger(__name__)


def get_database_manager() -> DatabaseManager:
    """Get the process-wide database manager configured from the environment."""
    return get_db_manager(
        database_url=config.get_database_url(),
        max_open=config.get_db_max_open_conns(),
        max_idle=config.get_db_max_idle_conns(),
        max_lifetime=config.get_db_conn_max_lifetime(),
    )


def get_db(
    db_manager: DatabaseManager = Depends(get_database_manager),
) -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    with db_manager.session_scope() as session:
        yield session


# Singleton enrichment queue
_enrichment_queue: EnrichmentQueue | None = None


def get_enrichment_queue() -> EnrichmentQueue:
    """Get or create singleton EnrichmentQueue."""
    global _enrichment_queue
    if _enrichment_queue is None:
        client = BoxOfficeClient(
            base_url=config.get_boxoffice_url(),
            api_key=config.get_boxoffice_api_key(),
            timeout=config.get_boxoffice_timeout(),
        )
        if not client.base_url:
            logger.warning("BOXOFFICE_URL is not set, box office enrichment will fail")
        _enrichment_queue = EnrichmentQueue(
            client=client,
            session_scope=get_database_manager().session_scope,
            max_workers=config.get_enrichment_workers(),
            max_pending=config.get_enrichment_queue_size(),
        )
    return _enrichment_queue


def shutdown_enrichment_queue(wait: bool = True) -> None:
    """Shut the enrichment queue down if it was started."""
    global _enrichment_queue
    if _enrichment_queue is not None:
        _enrichment_queue.shutdown(wait=wait)
        _enrichment_queue = None


def get_rater_id(request: Request) -> str:
    """Rater identity attached by RaterIdMiddleware."""
    rater_id = getattr(request.state, "rater_id", None)
    if not rater_id:
        raise UnauthorizedError("Missing X-Rater-Id header")
    return rater_id
