"""Persistence adapters (memory, FS, DuckDB)."""

from pulseboard.shared.infrastructure.persistence.kv_storage import (
    DuckDBStorage,
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    create_storage,
)

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "DuckDBStorage",
    "create_storage",
]
