"""
Configuration for the Qdrant orphan sync job.
Every setting is read from the environment once, at start-up.
"""

import os
from typing import Optional


DEFAULT_QDRANT_URL = "http://localhost:6333"
DEFAULT_PAGE_SIZE = 1000
MAX_POOL_SIZE = 10

TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_list(name: str) -> list[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


class SyncConfig:
    """Connection and batching settings shared by the sync job's collaborators."""

    def __init__(self):
        # Relational system of record
        self.database_url = os.getenv("DATABASE_URL", "")
        self.db_pool_size = _env_int("DB_POOL_SIZE", MAX_POOL_SIZE)
        self.point_table = os.getenv("POINT_TABLE", "chunk_metadata")
        self.point_id_column = os.getenv("POINT_ID_COLUMN", "qdrant_point_id")

        # Qdrant
        self.qdrant_url = os.getenv("QDRANT_URL", DEFAULT_QDRANT_URL)
        self.qdrant_api_key: Optional[str] = os.getenv("QDRANT_API_KEY") or None
        self.qdrant_timeout = _env_int("QDRANT_TIMEOUT", 60)

        # Batching and scheduling
        self.page_size = _env_int("SYNC_PAGE_SIZE", DEFAULT_PAGE_SIZE)
        self.workers = _env_int("SYNC_WORKERS", 1)
        self.max_retries = _env_int("SYNC_MAX_RETRIES", 0)
        self.collections = _env_list("SYNC_COLLECTIONS")
        self.dry_run = os.getenv("SYNC_DRY_RUN", "false").strip().lower() in TRUE_VALUES

    def validate(self) -> tuple[bool, str]:
        """
        Validate the loaded settings.

        Returns:
            tuple[bool, str]: (is_valid, error_message)
        """
        if not self.database_url:
            return False, "DATABASE_URL is required"
        if not self.qdrant_url:
            return False, "QDRANT_URL is required"
        if self.page_size < 1:
            return False, "SYNC_PAGE_SIZE must be at least 1"
        if self.workers < 1:
            return False, "SYNC_WORKERS must be at least 1"
        if not 1 <= self.db_pool_size <= MAX_POOL_SIZE:
            return False, f"DB_POOL_SIZE must be between 1 and {MAX_POOL_SIZE}"
        if self.max_retries < 0:
            return False, "SYNC_MAX_RETRIES cannot be negative"
        if not self.point_table.isidentifier() or not self.point_id_column.isidentifier():
            return False, "POINT_TABLE and POINT_ID_COLUMN must be plain SQL identifiers"
        return True, ""

    def describe(self) -> str:
        """One-line summary safe to print (no credentials)."""
        scope = ", ".join(self.collections) if self.collections else "all collections"
        mode = "dry run" if self.dry_run else "delete"
        return (
            f"Qdrant {self.qdrant_url} | {scope} | page size {self.page_size} | "
            f"workers {self.workers} | retries {self.max_retries} | {mode}"
        )
