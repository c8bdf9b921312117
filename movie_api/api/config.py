"""
API configuration loaded from environment or defaults.
"""

import os

from dotenv import load_dotenv

# Values from a local .env file never override the real environment
load_dotenv()


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def get_database_url() -> str:
    """Get SQLAlchemy database URL from env or default."""
    return os.getenv("DATABASE_URL", "") or "sqlite:///data/movies.db"


def get_db_max_open_conns() -> int:
    """Get maximum number of concurrently open database connections."""
    return _get_int("DB_MAX_OPEN_CONNS", 100)


def get_db_max_idle_conns() -> int:
    """Get number of connections kept in the pool."""
    return _get_int("DB_MAX_IDLE_CONNS", 10)


def get_db_conn_max_lifetime() -> int:
    """Get connection recycle lifetime in seconds."""
    return _get_int("DB_CONN_MAX_LIFETIME", 3600)


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get optional log file name."""
    return os.getenv("LOG_FILE") or None


def get_log_max_bytes() -> int:
    """Get the log file size that triggers rotation."""
    return _get_int("LOG_MAX_BYTES", 10 * 1024 * 1024)


def get_log_backup_count() -> int:
    """Get number of rotated log files to keep."""
    return _get_int("LOG_BACKUP_COUNT", 5)


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return _get_int("PORT", 8080)


def get_base_url() -> str:
    """Get the externally advertised base URL (used in Location headers)."""
    return (os.getenv("BASE_URL", "") or "http://127.0.0.1:8080").rstrip("/")


def get_auth_token() -> str:
    """Get the bearer token required for mutating endpoints."""
    return os.getenv("AUTH_TOKEN", "")


def get_boxoffice_url() -> str:
    """Get box-office provider base URL."""
    return os.getenv("BOXOFFICE_URL", "").rstrip("/")


def get_boxoffice_api_key() -> str:
    """Get box-office provider API key."""
    return os.getenv("BOXOFFICE_API_KEY", "")


def get_boxoffice_timeout() -> int:
    """Get outbound box-office request timeout in seconds."""
    return _get_int("BOXOFFICE_TIMEOUT", 10)


def get_enrichment_workers() -> int:
    """Get number of enrichment worker threads."""
    return _get_int("ENRICHMENT_WORKERS", 4)


def get_enrichment_queue_size() -> int:
    """Get maximum number of pending enrichments."""
    return _get_int("ENRICHMENT_QUEUE_SIZE", 100)
