"""Domain models for the dashboard state containers."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/avataaars/svg?seed={id}"


def avatar_url(user_id: int) -> str:
    """System-generated avatar for a user id."""
    return AVATAR_URL_TEMPLATE.format(id=user_id)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ThemeColor(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    RED = "red"
    ORANGE = "orange"


class LoginResult(str, Enum):
    """Outcome of a completed login attempt."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"


# =============================================================================
# METRICS
# =============================================================================

class StatCard(BaseModel):
    """Summary statistic shown as a card. Display-only."""
    title: str
    value: Number
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    icon: str
    color: str
    percent: Optional[float] = None
    increase: Optional[bool] = None


class ChartSeries(BaseModel):
    name: str
    data: List[Number]


class ChartDataset(BaseModel):
    """Categorical axis labels with series aligned positionally to them."""
    categories: List[str]
    series: List[ChartSeries]

    def is_aligned(self) -> bool:
        return all(len(s.data) == len(self.categories) for s in self.series)


class SalesSlice(BaseModel):
    name: str
    value: Number


class SalesDistribution(BaseModel):
    series: List[SalesSlice]


class ChartData(BaseModel):
    revenue_data: ChartDataset
    user_growth_data: ChartDataset
    sales_distribution_data: SalesDistribution


class Order(BaseModel):
    id: int
    customer: str
    date: str
    amount: Number
    status: OrderStatus


# =============================================================================
# DIRECTORY
# =============================================================================

class User(BaseModel):
    """A directory record. ``status`` is the active flag."""
    id: int
    name: str
    email: str
    role: str
    status: bool
    avatar: Optional[str] = None


class UserDraft(BaseModel):
    """Fields supplied by the caller when adding a user."""
    model_config = ConfigDict(extra='forbid')

    name: str
    email: str
    role: str
    status: bool


class UserUpdate(BaseModel):
    """Partial user fields; only explicitly set ones are applied."""
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    status: Optional[bool] = None
    avatar: Optional[str] = None

    def changes(self) -> dict:
        """Explicitly set fields. None only clears ``avatar``, the one nullable field."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key == "avatar"
        }


# =============================================================================
# PREFERENCES
# =============================================================================

class PreferencesRecord(BaseModel):
    """The durable preferences record.

    Built, validated and serialized with camelCase keys only:
    {"themeMode": ..., "themeColor": ..., "sidebarCollapsed": ...}
    """
    model_config = ConfigDict(frozen=True)

    theme_mode: ThemeMode = Field(alias="themeMode")
    theme_color: ThemeColor = Field(alias="themeColor")
    sidebar_collapsed: bool = Field(alias="sidebarCollapsed")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


DEFAULT_PREFERENCES = PreferencesRecord(
    themeMode=ThemeMode.LIGHT,
    themeColor=ThemeColor.BLUE,
    sidebarCollapsed=False,
)

PRIMARY_COLORS = {
    ThemeColor.BLUE: "#1890ff",
    ThemeColor.GREEN: "#52c41a",
    ThemeColor.PURPLE: "#722ed1",
    ThemeColor.RED: "#f5222d",
    ThemeColor.ORANGE: "#fa8c16",
}
