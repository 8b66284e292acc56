"""
Order Queue Service - Metrics Module

Counters, the queue size gauge and the serve timer, all registered on one
Prometheus registry per service instance.
"""

import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Dict, Iterator, List, Optional

from errors import DrainInterrupted
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, Histogram, generate_latest

logger = logging.getLogger(__name__)

ORDERS_METRIC = "orders"
QUEUE_SIZE_METRIC = "ordersInQueue"
SERVE_DURATION_METRIC = "orderServiceDuration"
SERVE_ACTIVE_METRIC = "orderServiceDuration_active"
REQUESTS_METRIC = "http_requests"

OUTCOME_SUCCESS = "success"
OUTCOME_INTERRUPTED = "interrupted"
OUTCOME_ERROR = "error"


class OrderMetrics:
    """Metrics sink for the order queue."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.started_at = time.time()
        self.last_request_at: Optional[str] = None

        self.orders = Counter(
            ORDERS_METRIC,
            "The number of orders ever placed, per category",
            ["type"],
            registry=self.registry,
        )
        self.queue_size = Gauge(
            QUEUE_SIZE_METRIC,
            "Number of unserved orders",
            registry=self.registry,
        )
        self.serve_duration = Histogram(
            SERVE_DURATION_METRIC,
            "Time spent serving orders",
            ["outcome"],
            registry=self.registry,
        )
        self.serve_active = Gauge(
            SERVE_ACTIVE_METRIC,
            "Serves currently in progress",
            registry=self.registry,
        )
        self.requests = Counter(
            REQUESTS_METRIC,
            "HTTP requests handled, excluding health and metrics",
            ["path"],
            registry=self.registry,
        )
        self._categories: Dict[str, Counter] = {}

    # --- Counters ---

    def register_category(self, category: str) -> Counter:
        """Return the counter child for `category`, creating it on first use."""
        child = self._categories.get(category)
        if child is None:
            child = self.orders.labels(type=category)
            self._categories[category] = child
        return child

    def count_order(self, category: str) -> bool:
        """
        Increment the counter of a registered category.
        Unregistered categories are not counted; returns whether it counted.
        """
        child = self._categories.get(category)
        if child is None:
            return False
        child.inc()
        return True

    def order_count(self, category: str) -> int:
        value = self.registry.get_sample_value(f"{ORDERS_METRIC}_total", {"type": category})
        return int(value or 0)

    def categories(self) -> List[str]:
        return list(self._categories)

    # --- Gauge ---

    def track_queue_size(self, callback: Callable[[], int]) -> None:
        """Bind the queue size gauge to `callback`, read lazily at scrape time."""
        self.queue_size.set_function(callback)

    # --- Timer ---

    @contextmanager
    def drain_timer(self) -> Iterator[None]:
        """
        Time the wrapped block as one serve sample.
        The block counts as in progress on the active gauge while it runs.
        Labels the sample `interrupted` when DrainInterrupted escapes, `error` for any
        other exception, `success` otherwise.
        """
        outcome = OUTCOME_SUCCESS
        start = time.perf_counter()
        try:
            with self.serve_active.track_inprogress():
                yield
        except DrainInterrupted:
            outcome = OUTCOME_INTERRUPTED
            raise
        except Exception:
            outcome = OUTCOME_ERROR
            raise
        finally:
            elapsed = time.perf_counter() - start
            self.serve_duration.labels(outcome=outcome).observe(elapsed)
            logger.debug(f"serve timed: outcome={outcome} seconds={elapsed:.3f}")

    def serve_count(self, outcome: str = OUTCOME_SUCCESS) -> int:
        value = self.registry.get_sample_value(f"{SERVE_DURATION_METRIC}_count", {"outcome": outcome})
        return int(value or 0)

    def serves_in_progress(self) -> int:
        return int(self.registry.get_sample_value(SERVE_ACTIVE_METRIC) or 0)

    def serve_seconds(self, outcome: str = OUTCOME_SUCCESS) -> float:
        value = self.registry.get_sample_value(f"{SERVE_DURATION_METRIC}_sum", {"outcome": outcome})
        return float(value or 0.0)

    # --- Requests ---

    def record_request(self, path: str) -> None:
        """
        Record an incoming request.
        Skips /health and /metrics so they don't pollute counters.
        """
        if path.startswith("/health") or path.startswith("/metrics"):
            return
        self.requests.labels(path=path).inc()
        self.last_request_at = datetime.now(timezone.utc).isoformat()

    def requests_total(self) -> int:
        total = 0.0
        for metric in self.requests.collect():
            for sample in metric.samples:
                if sample.name.endswith("_total"):
                    total += sample.value
        return int(total)

    # --- Export ---

    def render(self) -> bytes:
        """Prometheus text exposition of the registry."""
        return generate_latest(self.registry)

    def snapshot(self) -> dict:
        """
        Return a snapshot of current metrics as a dict.
        """
        uptime = int(time.time() - self.started_at)
        queue_size = self.registry.get_sample_value(QUEUE_SIZE_METRIC)
        return {
            "service": "orders",
            "uptime_seconds": uptime,
            "requests_total": self.requests_total(),
            "last_request_at": self.last_request_at,
            "queue_size": int(queue_size or 0),
            "orders": {c: self.order_count(c) for c in self._categories},
            "served": self.serve_count(OUTCOME_SUCCESS),
            "interrupted": self.serve_count(OUTCOME_INTERRUPTED),
            "in_progress": self.serves_in_progress(),
        }
