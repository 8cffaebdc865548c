"""Canonical event definitions for PulseBoard state containers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .event_bus import EventPayload

# Metrics
TOPIC_METRICS_LOADING = "metrics.loading"

# Directory
TOPIC_DIRECTORY_LOADING = "directory.loading"
TOPIC_DIRECTORY_USERS = "directory.users"
TOPIC_DIRECTORY_CURRENT_USER = "directory.current_user"
TOPIC_DIRECTORY_LOGIN = "directory.login"

# Preferences
TOPIC_PREFERENCES_CHANGED = "preferences.changed"


def create_loading_event(loading: bool) -> EventPayload:
    """Create a loading flag transition event."""
    return {"loading": loading}


def create_users_changed_event(
    action: str,
    user_id: int,
    user_count: int,
) -> EventPayload:
    """Create a directory change event.

    Args:
        action: One of "added", "updated", "deleted"
        user_id: Id of the affected user
        user_count: Directory size after the change
    """
    return {
        "action": action,
        "user_id": user_id,
        "user_count": user_count,
    }


def create_current_user_event(user: Optional[Dict[str, Any]]) -> EventPayload:
    """Create a current user change event (None on logout)."""
    return {"user": user}


def create_login_event(email: str, result: str) -> EventPayload:
    return {"email": email, "result": result}


def create_preferences_changed_event(field: str, record: Dict[str, Any]) -> EventPayload:
    """Create a preferences change event carrying the full record."""
    return {
        "field": field,
        "record": record,
    }
