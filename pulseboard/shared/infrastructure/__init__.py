"""
Shared Infrastructure Module
=============================

Technical adapters for external systems.
"""

# Persistence
from pulseboard.shared.infrastructure.persistence import (
    DuckDBStorage,
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    create_storage,
)

__all__ = [
    # Persistence
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "DuckDBStorage",
    "create_storage",
]
