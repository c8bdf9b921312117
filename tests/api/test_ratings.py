"""
API tests for rating endpoints.

Covers POST /movies/{title}/ratings and GET /movies/{title}/rating.
"""

import pytest

from movie_api.api.models.rating import VALID_RATINGS
from movie_api.database import crud


def _rate(client, title, value, rater="rater-1"):
    return client.post(
        f"/movies/{title}/ratings",
        json={"rating": value},
        headers={"X-Rater-Id": rater},
    )


class TestSubmitRating:
    """Tests for POST /movies/{title}/ratings."""

    def test_first_submission_creates(self, client, create_movie):
        """The first rating from a rater returns 201 with Location."""
        create_movie("Alien")

        r = _rate(client, "Alien", 4.5)

        assert r.status_code == 201
        assert r.headers["Location"] == "http://movies.test/movies/Alien/ratings"
        assert r.json() == {"movieTitle": "Alien", "raterId": "rater-1", "rating": 4.5}

    def test_second_submission_updates(self, client, create_movie, session):
        """A repeat rating returns 200, the same body shape, and keeps the row."""
        create_movie("Alien")
        _rate(client, "Alien", 2.0)
        original = crud.get_rating(session, "Alien", "rater-1")
        original_id, original_created_at = original.id, original.created_at

        r = _rate(client, "Alien", 3.5)

        assert r.status_code == 200
        assert "Location" not in r.headers
        assert r.json() == {"movieTitle": "Alien", "raterId": "rater-1", "rating": 3.5}

        session.expire_all()
        updated = crud.get_rating(session, "Alien", "rater-1")
        assert updated.id == original_id
        assert updated.created_at == original_created_at
        assert updated.rating == 3.5

    @pytest.mark.parametrize("value", VALID_RATINGS)
    def test_accepts_every_half_step(self, client, create_movie, value):
        create_movie("Alien")
        assert _rate(client, "Alien", value).status_code == 201

    @pytest.mark.parametrize("value", [0, 0.25, 1.2, 5.5, -1, 10])
    def test_rejects_values_outside_set(self, client, create_movie, value):
        """Values outside {0.5, 1.0, ..., 5.0} return 422."""
        create_movie("Alien")

        r = _rate(client, "Alien", value)

        assert r.status_code == 422
        assert r.json()["code"] == "BAD_REQUEST"

    @pytest.mark.parametrize(
        "body",
        [{"score": 4.0}, {"rating": True}, {"rating": "4.5"}, {"rating": None}],
    )
    def test_rejects_malformed_body(self, client, create_movie, session, body):
        create_movie("Alien")
        r = client.post(
            "/movies/Alien/ratings",
            json=body,
            headers={"X-Rater-Id": "rater-1"},
        )
        assert r.status_code == 422
        assert r.json()["code"] == "BAD_REQUEST"
        assert crud.get_rating(session, "Alien", "rater-1") is None

    def test_accepts_integer_rating(self, client, create_movie):
        create_movie("Alien")
        r = _rate(client, "Alien", 4)
        assert r.status_code == 201
        assert r.json()["rating"] == 4.0

    def test_unknown_movie(self, client):
        r = _rate(client, "Missing", 4.0)
        assert r.status_code == 404
        assert r.json() == {"code": "NOT_FOUND", "message": "Movie not found"}

    def test_requires_rater_id(self, client, create_movie):
        create_movie("Alien")
        r = client.post("/movies/Alien/ratings", json={"rating": 4.0})
        assert r.status_code == 401
        assert r.json()["code"] == "UNAUTHORIZED"

    def test_no_bearer_token_needed(self, client, create_movie):
        """Rating submission is exempt from bearer authentication."""
        create_movie("Alien")
        r = _rate(client, "Alien", 4.0)
        assert r.status_code == 201

    def test_title_with_spaces(self, client, create_movie):
        create_movie("The Matrix")
        r = _rate(client, "The Matrix", 5.0)
        assert r.status_code == 201
        assert r.json()["movieTitle"] == "The Matrix"
        assert r.headers["Location"] == "http://movies.test/movies/The%20Matrix/ratings"


class TestRatingAggregate:
    """Tests for GET /movies/{title}/rating."""

    def test_aggregate(self, client, create_movie):
        """Ratings [4.0, 5.0] average to 4.5 over 2."""
        create_movie("Alien")
        _rate(client, "Alien", 4.0, rater="a")
        _rate(client, "Alien", 5.0, rater="b")

        r = client.get("/movies/Alien/rating")

        assert r.status_code == 200
        assert r.json() == {"average": 4.5, "count": 2}

    def test_aggregate_counts_updates_once(self, client, create_movie):
        create_movie("Alien")
        _rate(client, "Alien", 1.0, rater="a")
        _rate(client, "Alien", 3.0, rater="a")

        assert client.get("/movies/Alien/rating").json() == {"average": 3.0, "count": 1}

    def test_aggregate_no_ratings(self, client, create_movie):
        create_movie("Alien")

        r = client.get("/movies/Alien/rating")

        assert r.status_code == 200
        assert r.json() == {"average": 0, "count": 0}

    def test_aggregate_unknown_movie(self, client):
        r = client.get("/movies/Missing/rating")
        assert r.status_code == 404
