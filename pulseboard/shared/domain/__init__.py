"""
Shared Domain Module
====================

Data shapes, seed content and derived-value functions.
"""

from . import selectors
from .models import (
    AVATAR_URL_TEMPLATE,
    DEFAULT_PREFERENCES,
    PRIMARY_COLORS,
    ChartData,
    ChartDataset,
    ChartSeries,
    LoginResult,
    Order,
    OrderStatus,
    PreferencesRecord,
    SalesDistribution,
    SalesSlice,
    StatCard,
    ThemeColor,
    ThemeMode,
    User,
    UserDraft,
    UserUpdate,
    avatar_url,
)

__all__ = [
    "selectors",
    "AVATAR_URL_TEMPLATE",
    "DEFAULT_PREFERENCES",
    "PRIMARY_COLORS",
    "ChartData",
    "ChartDataset",
    "ChartSeries",
    "LoginResult",
    "Order",
    "OrderStatus",
    "PreferencesRecord",
    "SalesDistribution",
    "SalesSlice",
    "StatCard",
    "ThemeColor",
    "ThemeMode",
    "User",
    "UserDraft",
    "UserUpdate",
    "avatar_url",
]
