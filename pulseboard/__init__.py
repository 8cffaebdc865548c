"""PulseBoard dashboard state layer."""

from .shared.core.event_bus import EventBus
from .state import DirectoryState, MetricsState, PreferencesState, Store

__version__ = "0.1.0"

__all__ = ["EventBus", "Store", "MetricsState", "DirectoryState", "PreferencesState"]
