"""Durable key-value slots.

Preferences live in a single string slot (``dashboard-settings`` by
default). Writes are synchronous whole-value overwrites.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

import duckdb

from pulseboard.shared.core.configuration import StorageConfig

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String key → string value storage."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value, replacing anything stored under key."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key; absent keys are ignored."""

    def close(self) -> None:
        pass


class MemoryStorage(KeyValueStorage):
    """Process-local storage, mostly for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileStorage(KeyValueStorage):
    """One file per key under a directory.

    Values are written to a temporary file and renamed into place so a
    reader never sees a half-written value.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug(f"Wrote {len(value)} chars to {path}")

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


class DuckDBStorage(KeyValueStorage):
    """Slots stored as rows of a ``kv_store`` table in a DuckDB database."""

    def __init__(self, db_path: str = ":memory:") -> None:
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn: Optional[duckdb.DuckDBPyConnection] = duckdb.connect(db_path)
        self._create_schema()
        logger.info(f"Key-value database initialized: {db_path}")

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key VARCHAR PRIMARY KEY,
                value VARCHAR NOT NULL,
                updated_at TIMESTAMP
            )
        """)

    def _connection(self) -> duckdb.DuckDBPyConnection:
        if self.conn is None:
            raise RuntimeError(f"Storage {self.db_path} is closed")
        return self.conn

    def get_item(self, key: str) -> Optional[str]:
        row = self._connection().execute(
            "SELECT value FROM kv_store WHERE key = ?", [key]
        ).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        self._connection().execute(
            "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)",
            [key, value],
        )

    def remove_item(self, key: str) -> None:
        self._connection().execute("DELETE FROM kv_store WHERE key = ?", [key])

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None


def create_storage(config: StorageConfig) -> KeyValueStorage:
    """Build the storage backend named by the configuration."""
    if config.backend == "memory":
        return MemoryStorage()
    if config.backend == "duckdb":
        return DuckDBStorage(config.path)
    return FileStorage(config.path)
