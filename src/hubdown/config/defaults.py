"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default conversion settings
DEFAULT_FRONTMATTER = False
DEFAULT_IGNORE: list[str] = []

# Default cache settings
DEFAULT_CACHE_DISABLED = False
DEFAULT_CACHE_DB_PATH: str | None = None
DEFAULT_CACHE_DISK_MB = 500.0

# Default concurrency settings
DEFAULT_MAX_WORKERS = 5

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "frontmatter": DEFAULT_FRONTMATTER,
        "ignore": list(DEFAULT_IGNORE),
        "cache_disabled": DEFAULT_CACHE_DISABLED,
        "cache_db_path": DEFAULT_CACHE_DB_PATH,
        "cache_disk_mb": DEFAULT_CACHE_DISK_MB,
        "max_workers": DEFAULT_MAX_WORKERS,
        "log_level": DEFAULT_LOG_LEVEL,
    }
