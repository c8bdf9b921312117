"""
Pytest fixtures shared by the movie catalog tests.

Each test gets a fresh in-memory SQLite database. API tests run the real
application with the database manager and enrichment queue overridden.
"""

import pytest
from fastapi.testclient import TestClient

from movie_api.api import dependencies
from movie_api.api.main import app
from movie_api.database.connection import DatabaseManager

AUTH_TOKEN = "test-token"
BASE_URL = "http://movies.test"


class RecordingEnrichmentQueue:
    """Enrichment queue stand-in that only records submitted titles."""

    def __init__(self):
        self.submitted = []

    def submit(self, title):
        self.submitted.append(title)
        return True


@pytest.fixture
def db_manager():
    """Create an in-memory database with all tables."""
    manager = DatabaseManager("sqlite:///:memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """Create a new database session for testing."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def enrichment_queue():
    return RecordingEnrichmentQueue()


@pytest.fixture
def client(db_manager, enrichment_queue, monkeypatch):
    """TestClient against the app, wired to the test database."""
    monkeypatch.setenv("AUTH_TOKEN", AUTH_TOKEN)
    monkeypatch.setenv("BASE_URL", BASE_URL)
    app.dependency_overrides[dependencies.get_database_manager] = lambda: db_manager
    app.dependency_overrides[dependencies.get_enrichment_queue] = lambda: enrichment_queue
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {AUTH_TOKEN}"}


@pytest.fixture
def create_movie(client, auth_headers):
    """Factory creating a movie through the API."""

    def _create(title="Inception", **fields):
        payload = {
            "title": title,
            "genre": "Sci-Fi",
            "releaseDate": "2010-07-16",
        }
        payload.update(fields)
        r = client.post("/movies", json=payload, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _create
