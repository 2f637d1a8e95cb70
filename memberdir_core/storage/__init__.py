# memberdir_core/storage/__init__.py

from .models import EntryRow
from .provider import RecordProvider, StoreError
from .providers.memory_provider import InMemoryRecordProvider
from .providers.sqlite_provider import SQLiteRecordProvider
from memberdir_core.constants import DEFAULT_DB_PATH, DEFAULT_STORAGE_PROVIDER
import os


def load_record_provider(config: dict | None = None) -> RecordProvider:
    """
    Factory resolver for selecting the persistence backend.

        - sqlite (default)
        - memory
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("MEMBERDIR_STORAGE_PROVIDER", DEFAULT_STORAGE_PROVIDER)

    if provider == "memory":
        return InMemoryRecordProvider()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("MEMBERDIR_DB_PATH", DEFAULT_DB_PATH)
        return SQLiteRecordProvider(str(db_path))

    raise ValueError(f"Unknown storage provider: {provider}")


__all__ = [
    "EntryRow",
    "RecordProvider",
    "StoreError",
    "InMemoryRecordProvider",
    "SQLiteRecordProvider",
    "load_record_provider",
]
