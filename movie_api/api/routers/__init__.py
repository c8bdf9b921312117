"""
API route handlers.
"""

from movie_api.api.routers import movies, ratings, system

__all__ = ["movies", "ratings", "system"]
