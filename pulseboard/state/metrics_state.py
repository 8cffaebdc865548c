"""Metrics container: summary stats, chart datasets and recent orders."""

from __future__ import annotations

import logging
from typing import List, Optional

from pulseboard.shared.core import events
from pulseboard.shared.core.event_bus import EventBus
from pulseboard.shared.core.scheduler import ScheduledCall, Scheduler
from pulseboard.shared.domain import selectors
from pulseboard.shared.domain.models import ChartData, Number, Order, OrderStatus, StatCard
from pulseboard.shared.domain.seed import seed_chart_data, seed_orders, seed_stats

from .base import StateContainer

logger = logging.getLogger(__name__)


class MetricsState(StateContainer):
    """Demo metrics with aggregates over the order list.

    The dataset is static; ``load()`` only simulates fetch latency by
    toggling ``loading``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        event_bus: Optional[EventBus] = None,
        load_delay: float = 1.0,
        stats: Optional[List[StatCard]] = None,
        chart_data: Optional[ChartData] = None,
        orders: Optional[List[Order]] = None,
    ) -> None:
        super().__init__(event_bus)
        self._scheduler = scheduler
        self._load_delay = load_delay

        self.stats: List[StatCard] = list(stats) if stats is not None else seed_stats()
        self.chart_data: ChartData = chart_data if chart_data is not None else seed_chart_data()
        self.recent_orders: List[Order] = list(orders) if orders is not None else seed_orders()
        self.loading = False

    # --- Derived ---

    @property
    def total_revenue(self) -> Number:
        return selectors.total_revenue(self.recent_orders)

    def orders_by_status(self, status: OrderStatus | str) -> List[Order]:
        return selectors.orders_by_status(self.recent_orders, status)

    # --- Actions ---

    def load(self) -> ScheduledCall:
        """Simulate fetching dashboard data.

        ``loading`` goes True now and False once the delay elapses. The
        pending completion cannot be cancelled.

        Returns:
            Handle of the scheduled completion

        Raises:
            RuntimeError: If the scheduler cannot schedule (AsyncioScheduler
                outside a running loop); ``loading`` is left unchanged
        """
        call = self._scheduler.call_later(
            self._load_delay,
            self._finish_load,
            name="metrics.load",
        )
        self._set_loading(True)
        return call

    def _finish_load(self) -> None:
        self._set_loading(False)
        logger.debug(f"Metrics loaded: {len(self.recent_orders)} orders, {len(self.stats)} stats")

    def _set_loading(self, loading: bool) -> None:
        self.loading = loading
        self._notify(events.TOPIC_METRICS_LOADING, events.create_loading_event(loading))
