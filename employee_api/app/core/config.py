"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment override them
via environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Employee API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Prefix under which the versioned router is mounted.  Set to an
    # empty string to serve ``/employees`` at the root.
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "employee.db")

    # ``sqlite`` keeps records on disk; ``memory`` keeps them for the
    # lifetime of the process only.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite").lower()

    # Insert the sample employees on startup when the store is empty.
    seed_data: bool = os.getenv("SEED_DATA", "false").lower() in {"1", "true", "yes"}

    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "100"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "1000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
