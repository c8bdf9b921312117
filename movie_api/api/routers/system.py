"""
System API endpoints (health).
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from movie_api.api.dependencies import get_database_manager
from movie_api.database.connection import DatabaseManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/healthz")
def health_check(db_manager: DatabaseManager = Depends(get_database_manager)):
    """Health check: database reachable."""
    try:
        db_manager.ping()
    except SQLAlchemyError as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}
