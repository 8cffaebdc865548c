"""Demo content the containers start with.

Each factory returns fresh objects so separate containers never share
mutable state.
"""

from __future__ import annotations

from typing import List

from .models import (
    ChartData,
    ChartDataset,
    ChartSeries,
    Order,
    OrderStatus,
    SalesDistribution,
    SalesSlice,
    StatCard,
    User,
    avatar_url,
)

MONTHS = ["T1", "T2", "T3", "T4", "T5", "T6", "T7", "T8", "T9", "T10", "T11", "T12"]


def seed_stats() -> List[StatCard]:
    return [
        StatCard(
            title="Tổng người dùng",
            value=4385,
            icon="user",
            color="#1890ff",
            percent=15.8,
            increase=True,
        ),
        StatCard(
            title="Doanh thu",
            value=126500,
            prefix="₫",
            suffix="k",
            icon="money-collect",
            color="#52c41a",
            percent=8.2,
            increase=True,
        ),
        StatCard(
            title="Đơn hàng",
            value=758,
            icon="shopping-cart",
            color="#722ed1",
            percent=3.1,
            increase=False,
        ),
        StatCard(
            title="Tỷ lệ chuyển đổi",
            value=6.8,
            suffix="%",
            icon="rise",
            color="#fa8c16",
            percent=4.2,
            increase=True,
        ),
    ]


def seed_chart_data() -> ChartData:
    return ChartData(
        revenue_data=ChartDataset(
            categories=list(MONTHS),
            series=[
                ChartSeries(name="Doanh thu", data=[35, 41, 62, 42, 58, 63, 60, 66, 78, 76, 86, 95]),
                ChartSeries(name="Chi phí", data=[20, 25, 30, 22, 30, 35, 30, 40, 42, 45, 55, 60]),
            ],
        ),
        user_growth_data=ChartDataset(
            categories=list(MONTHS),
            series=[
                ChartSeries(
                    name="Người dùng mới",
                    data=[120, 132, 101, 134, 190, 230, 210, 180, 200, 220, 240, 220],
                ),
                ChartSeries(
                    name="Người dùng hoạt động",
                    data=[220, 232, 201, 234, 290, 330, 310, 280, 300, 320, 340, 320],
                ),
            ],
        ),
        sales_distribution_data=SalesDistribution(
            series=[
                SalesSlice(name="Điện thoại", value=35),
                SalesSlice(name="Máy tính", value=20),
                SalesSlice(name="Phụ kiện", value=18),
                SalesSlice(name="Thiết bị thông minh", value=15),
                SalesSlice(name="Khác", value=12),
            ]
        ),
    )


def seed_orders() -> List[Order]:
    return [
        Order(id=1001, customer="Nguyễn Văn A", date="2025-03-15", amount=1250000, status=OrderStatus.COMPLETED),
        Order(id=1002, customer="Trần Thị B", date="2025-03-16", amount=850000, status=OrderStatus.PROCESSING),
        Order(id=1003, customer="Lê Văn C", date="2025-03-16", amount=2100000, status=OrderStatus.PENDING),
        Order(id=1004, customer="Phạm Thị D", date="2025-03-17", amount=750000, status=OrderStatus.COMPLETED),
        Order(id=1005, customer="Hoàng Văn E", date="2025-03-17", amount=1800000, status=OrderStatus.CANCELLED),
    ]


def seed_users() -> List[User]:
    people = [
        (1, "Admin User", "admin@example.com", "Admin", True),
        (2, "John Doe", "john@example.com", "Manager", True),
        (3, "Jane Smith", "jane@example.com", "User", True),
        (4, "Bob Johnson", "bob@example.com", "User", False),
        (5, "Alice Brown", "alice@example.com", "User", True),
    ]
    return [
        User(id=user_id, name=name, email=email, role=role, status=status, avatar=avatar_url(user_id))
        for user_id, name, email, role, status in people
    ]
