"""State containers for the dashboard.

Architecture:
- MetricsState: demo metrics and order aggregates
- DirectoryState: user directory and simulated login
- PreferencesState: theme/layout preferences with write-through persistence
- Store: composition root that wires the containers to their collaborators
"""

from .directory_state import DirectoryState
from .metrics_state import MetricsState
from .preferences_state import PreferencesState
from .store import Store

__all__ = ["DirectoryState", "MetricsState", "PreferencesState", "Store"]
