"""Common plumbing for the state containers."""

from __future__ import annotations

from typing import Optional

from pulseboard.shared.core.event_bus import EventBus, EventPayload


class StateContainer:
    """An independently owned unit of application state.

    Actions mutate the container synchronously and announce the change on
    the event bus, when one was injected.
    """

    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        self.bus = event_bus

    def _notify(self, topic: str, payload: EventPayload) -> None:
        if self.bus is not None:
            self.bus.publish_nowait(topic, payload)
