"""
Background box-office enrichment of newly created movies.

Enrichment is best effort: requests are queued on a bounded worker pool,
failures are logged and never reach the API client, and a movie whose lookup
fails simply keeps no box-office data.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import AbstractContextManager
from typing import Callable

from sqlalchemy.orm import Session

from movie_api.database import crud
from movie_api.services.boxoffice import (
    BoxOfficeClient,
    BoxOfficeError,
    BoxOfficeNotFoundError,
)

logger = logging.getLogger(__name__)


class EnrichmentQueue:
    """
    Bounded worker pool that fetches box-office data and writes it back.

    At most ``max_pending`` enrichments may be queued or running at once;
    further submissions are dropped with a warning.
    """

    def __init__(
        self,
        client: BoxOfficeClient,
        session_scope: Callable[[], AbstractContextManager[Session]],
        max_workers: int = 4,
        max_pending: int = 100,
    ):
        self._client = client
        self._session_scope = session_scope
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, max_workers), thread_name_prefix="enrichment"
        )
        self._slots = threading.BoundedSemaphore(max(1, max_pending))

    def submit(self, title: str) -> bool:
        """
        Schedule enrichment of a movie without waiting for it.

        Returns:
            True if the enrichment was queued, False if it was dropped
        """
        if not self._slots.acquire(blocking=False):
            logger.warning("Enrichment queue is full, skipping box office lookup for %r", title)
            return False
        try:
            future = self._executor.submit(self.enrich, title)
        except RuntimeError:
            self._slots.release()
            logger.warning("Enrichment queue is shut down, skipping box office lookup for %r", title)
            return False
        future.add_done_callback(lambda f: self._on_done(title, f))
        return True

    def _on_done(self, title: str, future: Future) -> None:
        self._slots.release()
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Failed to update box office data for %r", title,
                exc_info=(type(exc), exc, exc.__traceback__)
            )

    def enrich(self, title: str) -> bool:
        """
        Fetch box-office data for a movie and store it.

        Returns:
            True if the movie was updated, False if the lookup failed
        """
        try:
            box_office = self._client.get_movie_data(title)
        except BoxOfficeNotFoundError:
            logger.info("No box office data found for %r", title)
            return False
        except BoxOfficeError as e:
            logger.warning("Failed to fetch box office data for %r: %s", title, e)
            return False

        with self._session_scope() as session:
            updated = crud.update_movie_box_office(
                session, title, box_office.model_dump(mode="json", by_alias=True)
            )
        if not updated:
            logger.info("Movie %r no longer exists, box office data discarded", title)
            return False
        logger.info("Stored box office data for %r", title)
        return True

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work, optionally wait for queued enrichments, then close the client."""
        self._executor.shutdown(wait=wait)
        self._client.close()
