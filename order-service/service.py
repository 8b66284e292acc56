"""
Order Queue Service - Core

In-memory FIFO of orders with per-category counters, a queue size gauge
and a timed serve step driven from outside.
"""

import logging
import threading
from collections import deque
from typing import Deque, Dict, Iterable, Optional

from config import KNOWN_CATEGORIES, SECONDS_PER_UNIT
from errors import DrainInterrupted
from metrics import OrderMetrics
from schemas import Order

# --- Logging ---
logger = logging.getLogger(__name__)


class OrderQueueService:
    """
    Owns the pending orders.

    - enqueue appends and counts under one lock
    - drain_one pops the head under the lock, then waits unlocked
    - only known categories are counted; other orders are queued uncounted
    - the queue is unbounded
    """

    def __init__(
        self,
        metrics: OrderMetrics,
        seconds_per_unit: float = SECONDS_PER_UNIT,
        known_categories: Iterable[str] = KNOWN_CATEGORIES,
    ) -> None:
        self.metrics = metrics
        self.seconds_per_unit = seconds_per_unit
        self._pending: Deque[Order] = deque()
        self._lock = threading.Lock()
        self._stop = threading.Event()

        for category in known_categories:
            self.metrics.register_category(category)
        self.metrics.track_queue_size(self.queue_size)

    def enqueue(self, order: Order) -> None:
        with self._lock:
            self._pending.append(order)
            counted = self.metrics.count_order(order.category)
        if not counted:
            logger.debug(f"order not counted: unknown category={order.category}")

    def drain_one(self) -> Optional[Order]:
        """
        Remove the oldest order and block for its magnitude in time units.

        Returns:
            The served order, or None when the queue was empty.

        Raises:
            DrainInterrupted: stop() was called before the wait finished.
                The order stays removed.
        """
        with self._lock:
            if not self._pending:
                return None
            order = self._pending.popleft()

        wait = order.magnitude * self.seconds_per_unit
        logger.info(f"serving order: category={order.category} magnitude={order.magnitude}")
        if self._stop.wait(wait):
            logger.warning(f"serving interrupted, order dropped: category={order.category}")
            raise DrainInterrupted(order)
        return order

    def timed_drain(self) -> Optional[Order]:
        """drain_one wrapped in the serve timer; empty drains are timed too."""
        with self.metrics.drain_timer():
            return self.drain_one()

    def queue_size(self) -> int:
        return len(self._pending)

    def counts(self) -> Dict[str, int]:
        return {c: self.metrics.order_count(c) for c in self.metrics.categories()}

    def stop(self) -> None:
        """Interrupt the wait in progress and every later one."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
