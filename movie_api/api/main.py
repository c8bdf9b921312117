"""
FastAPI application entry point for the Movie Catalog API.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movie_api.api.config import (
    get_api_host,
    get_api_port,
    get_auth_token,
    get_log_backup_count,
    get_log_file,
    get_log_level,
    get_log_max_bytes,
)
from movie_api.api.dependencies import get_database_manager, shutdown_enrichment_queue
from movie_api.api.errors import register_exception_handlers
from movie_api.api.middleware import BearerAuthMiddleware, RaterIdMiddleware
from movie_api.api.routers import movies, ratings, system
from movie_api.database.init_db import init_database, verify_schema
from movie_api.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def configure_logging():
    """Set up logging from the LOG_* environment settings."""
    setup_logging(
        level=get_log_level(),
        log_file=get_log_file(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if not get_auth_token():
        logger.warning("AUTH_TOKEN is not set, all authenticated endpoints will reject requests")
    db_manager = init_database(get_database_manager())
    if not verify_schema(db_manager):
        raise RuntimeError("Database schema is incomplete")
    yield
    shutdown_enrichment_queue(wait=False)
    db_manager.close()


app = FastAPI(
    title="Movie Catalog API",
    description="REST API for movie metadata, ratings and box-office data",
    version="1.0.0",
    lifespan=lifespan,
)

# Each added middleware wraps the previous ones: CORS, bearer auth, rater identity
app.add_middleware(RaterIdMiddleware)
app.add_middleware(BearerAuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(system.router)
app.include_router(movies.router)
app.include_router(ratings.router)


def main():
    """Run the API server."""
    configure_logging()
    port = get_api_port()
    logger.info("Server starting on port %s", port)
    uvicorn.run(app, host=get_api_host(), port=port)


if __name__ == "__main__":
    main()
