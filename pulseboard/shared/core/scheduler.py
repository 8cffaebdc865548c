"""One-shot delayed callbacks for simulated asynchronous operations.

A scheduled call fires exactly once after its delay and cannot be
cancelled. Two implementations are provided:

- AsyncioScheduler: real time, backed by the running event loop
- VirtualScheduler: virtual time, advanced explicitly (tests)
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a pending one-shot callback."""

    def __init__(self, due: float, callback: Callable[[], None], name: str = "") -> None:
        self.due = due
        self.name = name or getattr(callback, "__name__", "callback")
        self._callback = callback
        self._fired = False

    @property
    def done(self) -> bool:
        return self._fired

    def fire(self) -> None:
        """Run the callback; later calls are ignored."""
        if self._fired:
            return
        self._fired = True
        logger.debug(f"Firing scheduled call '{self.name}'")
        self._callback()

    def __repr__(self) -> str:
        state = "done" if self._fired else "pending"
        return f"ScheduledCall({self.name!r}, due={self.due:.3f}, {state})"


class Scheduler(ABC):
    """Schedules callbacks after a delay."""

    @abstractmethod
    def call_later(
        self, delay: float, callback: Callable[[], None], name: str = ""
    ) -> ScheduledCall:
        """Run callback once after delay seconds.

        Args:
            delay: Seconds to wait, must be >= 0
            callback: Zero-argument callable
            name: Optional label used in logs

        Returns:
            Handle for the pending call
        """

    @abstractmethod
    def pending_count(self) -> int:
        """Number of calls scheduled but not yet fired."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self) -> None:
        self._pending: Set[ScheduledCall] = set()
        self._waiters: List[asyncio.Future] = []

    def call_later(
        self, delay: float, callback: Callable[[], None], name: str = ""
    ) -> ScheduledCall:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        loop = asyncio.get_running_loop()
        call = ScheduledCall(loop.time() + delay, callback, name)
        self._pending.add(call)
        loop.call_later(delay, self._run, call)
        return call

    def _run(self, call: ScheduledCall) -> None:
        try:
            call.fire()
        finally:
            self._pending.discard(call)
            if not self._pending:
                for waiter in self._waiters:
                    if not waiter.done():
                        waiter.set_result(None)
                self._waiters.clear()

    def pending_count(self) -> int:
        return len(self._pending)

    async def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait for every pending call to fire.

        Returns:
            True if idle, False if timeout reached first
        """
        if not self._pending:
            return True
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await asyncio.wait_for(asyncio.shield(waiter), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Scheduler: Timeout with {len(self._pending)} pending call(s)")
            return False
        return True


class VirtualScheduler(Scheduler):
    """Scheduler driven by a virtual clock.

    Nothing fires until advance() moves the clock past a call's due time.
    Calls due at the same time fire in scheduling order.

    Usage:
        scheduler = VirtualScheduler()
        store.metrics.load()
        scheduler.advance(1.0)
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(
        self, delay: float, callback: Callable[[], None], name: str = ""
    ) -> ScheduledCall:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        call = ScheduledCall(self._now + delay, callback, name)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def pending_count(self) -> int:
        return len(self._queue)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every call that became due.

        Returns:
            Number of calls fired
        """
        if seconds < 0:
            raise ValueError("Cannot move virtual time backwards")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self._now = due
            call.fire()
            fired += 1
        self._now = target
        return fired

    def run_all(self) -> int:
        """Advance to the last pending call and fire everything."""
        if not self._queue:
            return 0
        last_due = max(due for due, _, _ in self._queue)
        return self.advance(last_due - self._now)
