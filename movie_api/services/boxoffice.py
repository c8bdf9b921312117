"""
Client for the external box-office data provider.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from movie_api.api.models.movie import BoxOffice, BoxOfficeRevenue

logger = logging.getLogger(__name__)

BOX_OFFICE_CURRENCY = "USD"
BOX_OFFICE_SOURCE = "BoxOfficeAPI"
DEFAULT_TIMEOUT = 10


class BoxOfficeError(Exception):
    """Base exception for box-office provider errors"""
    pass


class BoxOfficeNotFoundError(BoxOfficeError):
    """The provider has no data for the requested title"""
    pass


class BoxOfficeUpstreamError(BoxOfficeError):
    """The provider could not be reached or answered with an error status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BoxOfficeDecodeError(BoxOfficeError):
    """The provider answered with a body that could not be decoded"""
    pass


class _ProviderRevenue(BaseModel):
    worldwide: int = 0
    opening_weekend_usa: int = Field(0, alias="openingWeekendUSA")


class _ProviderResponse(BaseModel):
    """Subset of the provider payload that enrichment uses."""

    title: Optional[str] = None
    revenue: _ProviderRevenue = Field(default_factory=_ProviderRevenue)


class BoxOfficeClient:
    """Client for the box-office provider API"""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"X-API-Key": api_key})

    def get_movie_data(self, title: str) -> BoxOffice:
        """
        Fetch box-office figures for a title.

        Args:
            title: Movie title

        Returns:
            BoxOffice snapshot stamped with the current time

        Raises:
            BoxOfficeNotFoundError: Provider has no data for the title
            BoxOfficeUpstreamError: Transport failure or non-success status
            BoxOfficeDecodeError: Response body could not be decoded
        """
        try:
            response = self.session.get(
                f"{self.base_url}/boxoffice",
                params={"title": title},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise BoxOfficeUpstreamError(f"Box office request failed: {e}") from e

        if response.status_code == 404:
            raise BoxOfficeNotFoundError(f"Movie '{title}' not found in box office API")

        if response.status_code != 200:
            raise BoxOfficeUpstreamError(
                f"Box office API returned status: {response.status_code}",
                status_code=response.status_code
            )

        try:
            payload = _ProviderResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BoxOfficeDecodeError(f"Invalid box office response for '{title}': {e}") from e

        # Provider currency and source fields are not trusted
        return BoxOffice(
            revenue=BoxOfficeRevenue(
                worldwide=payload.revenue.worldwide,
                opening_weekend_usa=payload.revenue.opening_weekend_usa
            ),
            currency=BOX_OFFICE_CURRENCY,
            source=BOX_OFFICE_SOURCE,
            last_updated=datetime.now(timezone.utc)
        )

    def close(self):
        """Release pooled HTTP connections."""
        self.session.close()
