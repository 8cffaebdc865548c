"""Composition root for the state containers.

The application builds one Store at startup and hands it (or the
individual containers) to presentation code. There is no global
instance; tests build as many isolated stores as they need.
"""

from __future__ import annotations

import logging
from typing import Optional

from pulseboard.shared.core.configuration import SystemConfig
from pulseboard.shared.core.event_bus import EventBus
from pulseboard.shared.core.scheduler import AsyncioScheduler, Scheduler
from pulseboard.shared.infrastructure.persistence.kv_storage import (
    KeyValueStorage,
    create_storage,
)

from .directory_state import DirectoryState
from .metrics_state import MetricsState
from .preferences_state import PreferencesState

logger = logging.getLogger(__name__)


class Store:
    """Owns the metrics, directory and preferences containers.

    With the default AsyncioScheduler, load() and login() must be called
    while an event loop is running.

    Usage:
        async def start(config):
            store = Store.create(config)
            store.metrics.load()
            store.preferences.set_theme_mode("dark")
    """

    def __init__(
        self,
        metrics: MetricsState,
        directory: DirectoryState,
        preferences: PreferencesState,
        event_bus: EventBus,
        scheduler: Scheduler,
        storage: KeyValueStorage,
    ) -> None:
        self.metrics = metrics
        self.directory = directory
        self.preferences = preferences
        self.bus = event_bus
        self.scheduler = scheduler
        self.storage = storage

    @classmethod
    def create(
        cls,
        config: Optional[SystemConfig] = None,
        event_bus: Optional[EventBus] = None,
        scheduler: Optional[Scheduler] = None,
        storage: Optional[KeyValueStorage] = None,
    ) -> "Store":
        """Build a store, filling in collaborators from the configuration.

        Args:
            config: System configuration, defaults when omitted
            event_bus: Bus the containers publish changes on
            scheduler: Scheduler for simulated latency (AsyncioScheduler by default)
            storage: Durable storage for preferences (from config.storage by default)

        Returns:
            The wired store
        """
        if config is None:
            config = SystemConfig()
        if event_bus is None:
            event_bus = EventBus()
        if scheduler is None:
            scheduler = AsyncioScheduler()
        # MemoryStorage defines __len__; an empty one is falsy
        if storage is None:
            storage = create_storage(config.storage)

        store = cls(
            metrics=MetricsState(
                scheduler,
                event_bus=event_bus,
                load_delay=config.timing.metrics_load_delay,
            ),
            directory=DirectoryState(
                scheduler,
                event_bus=event_bus,
                login_delay=config.timing.login_delay,
                clear_current_user_on_failed_login=config.directory.clear_current_user_on_failed_login,
            ),
            preferences=PreferencesState(
                storage,
                event_bus=event_bus,
                settings_key=config.storage.settings_key,
                hydration=config.preferences.hydration,
            ),
            event_bus=event_bus,
            scheduler=scheduler,
            storage=storage,
        )
        logger.info(f"Store created (storage backend: {type(storage).__name__})")
        return store

    def close(self) -> None:
        """Release the storage backend."""
        self.storage.close()
