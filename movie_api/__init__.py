"""
Movie Catalog API Application Package.

This package contains the HTTP API, the persistence layer for movies and
ratings, and the box-office enrichment services.
"""

__version__ = "1.0.0"
