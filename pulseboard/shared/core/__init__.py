"""
Shared Core Module
==================

Event system, scheduling and configuration.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Scheduling
from .scheduler import AsyncioScheduler, ScheduledCall, Scheduler, VirtualScheduler

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Scheduling
    "Scheduler",
    "ScheduledCall",
    "AsyncioScheduler",
    "VirtualScheduler",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "ValidationLevel",
]
