"""
Shared utilities package.

This package contains logging configuration and other shared utilities
used across the application.
"""

from movie_api.utils.logging_config import setup_logging

__all__ = ['setup_logging']
