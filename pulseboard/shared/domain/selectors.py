"""Derived values as pure functions over container state.

Containers expose these as properties that call through on every read, so
a derived value is never cached stale.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .models import (
    PRIMARY_COLORS,
    Number,
    Order,
    OrderStatus,
    ThemeColor,
    ThemeMode,
    User,
)


def total_revenue(orders: Iterable[Order]) -> Number:
    return sum(order.amount for order in orders)


def orders_by_status(orders: Iterable[Order], status: OrderStatus | str) -> List[Order]:
    """Orders with the given status, in original order.

    An unrecognized status matches nothing.
    """
    return [order for order in orders if order.status == status]


def find_user(users: Iterable[User], user_id: int) -> Optional[User]:
    return next((user for user in users if user.id == user_id), None)


def find_user_by_email(users: Iterable[User], email: str) -> Optional[User]:
    """Exact, case-sensitive email match."""
    return next((user for user in users if user.email == email), None)


def active_users(users: Iterable[User]) -> List[User]:
    return [user for user in users if user.status]


def next_user_id(users: Sequence[User]) -> int:
    """max(existing ids, default 0) + 1; ids are never reused."""
    return max((user.id for user in users), default=0) + 1


def is_dark_mode(theme_mode: ThemeMode) -> bool:
    return theme_mode == ThemeMode.DARK


def primary_color(theme_color: ThemeColor) -> str:
    return PRIMARY_COLORS[ThemeColor(theme_color)]
