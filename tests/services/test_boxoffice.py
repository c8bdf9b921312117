"""
Tests for the box-office provider client.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from movie_api.services.boxoffice import (
    BoxOfficeClient,
    BoxOfficeDecodeError,
    BoxOfficeError,
    BoxOfficeNotFoundError,
    BoxOfficeUpstreamError,
)

PROVIDER_PAYLOAD = {
    "title": "Avatar",
    "distributor": "20th Century Fox",
    "releaseDate": "2009-12-18",
    "budget": 237000000,
    "revenue": {"worldwide": 2923706026, "openingWeekendUSA": 77025481},
    "mpaRating": "PG-13",
    "currency": "EUR",
    "source": "SomethingElse",
}


def _response(status_code=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return BoxOfficeClient("https://boxoffice.test/", "secret-key", timeout=10, session=session)


class TestGetMovieData:

    def test_success(self, client, session):
        session.get.return_value = _response(payload=PROVIDER_PAYLOAD)
        before = datetime.now(timezone.utc)

        box_office = client.get_movie_data("Avatar")

        assert box_office.revenue.worldwide == 2923706026
        assert box_office.revenue.opening_weekend_usa == 77025481
        assert box_office.currency == "USD"
        assert box_office.source == "BoxOfficeAPI"
        assert box_office.last_updated >= before

    def test_request_shape(self, client, session):
        session.get.return_value = _response(payload=PROVIDER_PAYLOAD)

        client.get_movie_data("The Matrix")

        session.get.assert_called_once_with(
            "https://boxoffice.test/boxoffice",
            params={"title": "The Matrix"},
            timeout=10,
        )
        session.headers.update.assert_called_once_with({"X-API-Key": "secret-key"})

    def test_missing_revenue_defaults_to_zero(self, client, session):
        session.get.return_value = _response(payload={"title": "Tiny"})

        box_office = client.get_movie_data("Tiny")

        assert box_office.revenue.worldwide == 0
        assert box_office.revenue.opening_weekend_usa == 0

    def test_not_found(self, client, session):
        session.get.return_value = _response(status_code=404)

        with pytest.raises(BoxOfficeNotFoundError):
            client.get_movie_data("Missing")

    @pytest.mark.parametrize("status_code", [401, 429, 500, 503])
    def test_error_status(self, client, session, status_code):
        session.get.return_value = _response(status_code=status_code)

        with pytest.raises(BoxOfficeUpstreamError) as exc_info:
            client.get_movie_data("Avatar")

        assert exc_info.value.status_code == status_code

    def test_transport_failure(self, client, session):
        session.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(BoxOfficeUpstreamError) as exc_info:
            client.get_movie_data("Avatar")

        assert exc_info.value.status_code is None

    def test_timeout(self, client, session):
        session.get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(BoxOfficeUpstreamError):
            client.get_movie_data("Avatar")

    def test_body_not_json(self, client, session):
        session.get.return_value = _response(json_error=ValueError("Expecting value"))

        with pytest.raises(BoxOfficeDecodeError):
            client.get_movie_data("Avatar")

    @pytest.mark.parametrize(
        "payload",
        [
            ["not", "an", "object"],
            {"revenue": {"worldwide": "a lot"}},
            {"revenue": "none"},
        ],
    )
    def test_body_wrong_shape(self, client, session, payload):
        session.get.return_value = _response(payload=payload)

        with pytest.raises(BoxOfficeDecodeError):
            client.get_movie_data("Avatar")

    def test_errors_share_base_class(self):
        for error in (BoxOfficeNotFoundError, BoxOfficeUpstreamError, BoxOfficeDecodeError):
            assert issubclass(error, BoxOfficeError)


def test_close_releases_session(client, session):
    client.close()
    session.close.assert_called_once()
