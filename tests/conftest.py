"""Shared fixtures for the state container tests."""

from __future__ import annotations

from typing import List

import pytest

from pulseboard.shared.core.event_bus import EventBus, EventPayload
from pulseboard.shared.core.scheduler import VirtualScheduler
from pulseboard.shared.infrastructure.persistence import MemoryStorage


class Recorder:
    """Async event handler that keeps every payload it receives."""

    def __init__(self) -> None:
        self.payloads: List[EventPayload] = []

    async def __call__(self, payload: EventPayload) -> None:
        self.payloads.append(payload)


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
