"""Preferences container with write-through persistence."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from pulseboard.shared.core import events
from pulseboard.shared.core.configuration import ValidationLevel
from pulseboard.shared.core.event_bus import EventBus
from pulseboard.shared.domain import selectors
from pulseboard.shared.domain.models import (
    DEFAULT_PREFERENCES,
    PreferencesRecord,
    ThemeColor,
    ThemeMode,
)
from pulseboard.shared.infrastructure.persistence.kv_storage import KeyValueStorage

from .base import StateContainer

logger = logging.getLogger(__name__)

SETTINGS_KEY = "dashboard-settings"


class PreferencesState(StateContainer):
    """Theme and layout preferences, durable across restarts.

    The stored record is read once, when the container is built. Every
    action rewrites the whole record before it returns.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        event_bus: Optional[EventBus] = None,
        settings_key: str = SETTINGS_KEY,
        hydration: ValidationLevel = ValidationLevel.LENIENT,
    ) -> None:
        super().__init__(event_bus)
        self._storage = storage
        self._settings_key = settings_key

        record = self._hydrate(ValidationLevel(hydration))
        self.theme_mode: ThemeMode = record.theme_mode
        self.theme_color: ThemeColor = record.theme_color
        self.sidebar_collapsed: bool = record.sidebar_collapsed

    def _hydrate(self, level: ValidationLevel) -> PreferencesRecord:
        """Read the stored record, validating its schema.

        Raises:
            ValueError: If the record is malformed and level is STRICT
        """
        raw = self._storage.get_item(self._settings_key)
        if raw is None:
            logger.debug(f"No stored preferences under '{self._settings_key}', using defaults")
            return DEFAULT_PREFERENCES

        try:
            return PreferencesRecord.model_validate_json(raw)
        except ValidationError as e:
            if level == ValidationLevel.STRICT:
                raise ValueError(f"Stored preferences are invalid: {e}") from e
            logger.warning(f"Stored preferences are invalid, using defaults: {e}")
            return DEFAULT_PREFERENCES

    # --- Derived ---

    @property
    def is_dark_mode(self) -> bool:
        return selectors.is_dark_mode(self.theme_mode)

    @property
    def primary_color(self) -> str:
        return selectors.primary_color(self.theme_color)

    def snapshot(self) -> PreferencesRecord:
        return PreferencesRecord(
            themeMode=self.theme_mode,
            themeColor=self.theme_color,
            sidebarCollapsed=self.sidebar_collapsed,
        )

    # --- Actions ---

    def set_theme_mode(self, mode: ThemeMode | str) -> None:
        self.theme_mode = ThemeMode(mode)
        self._commit("themeMode")

    def set_theme_color(self, color: ThemeColor | str) -> None:
        self.theme_color = ThemeColor(color)
        self._commit("themeColor")

    def toggle_sidebar(self) -> None:
        self.sidebar_collapsed = not self.sidebar_collapsed
        self._commit("sidebarCollapsed")

    def save_settings(self) -> None:
        """Write the three preference fields, replacing the stored record."""
        self._storage.set_item(self._settings_key, self.snapshot().to_json())

    def _commit(self, field: str) -> None:
        self.save_settings()
        record = self.snapshot()
        logger.debug(f"Preference '{field}' changed: {record.to_json()}")
        self._notify(
            events.TOPIC_PREFERENCES_CHANGED,
            events.create_preferences_changed_event(field, record.model_dump(mode="json", by_alias=True)),
        )
