"""
Order Queue Service - Periodic Jobs

Producer: enqueues a generated order every ORDER_INTERVAL_SECONDS.
Drainer: serves the oldest order every DRAIN_INTERVAL_SECONDS.

Both run at a fixed rate on the event loop; serving blocks, so it runs in a
worker thread and never holds up the producer or request handling.
"""

import asyncio
import logging
from typing import List

from config import DRAIN_INTERVAL_SECONDS, ORDER_INTERVAL_SECONDS
from errors import DrainInterrupted
from service import OrderQueueService
from utils import generate_order

# --- Logging ---
logger = logging.getLogger(__name__)


async def _fixed_rate(interval: float, next_run: float) -> float:
    """Sleep until the next slot and return it. A late slot fires immediately."""
    loop = asyncio.get_running_loop()
    next_run += interval
    await asyncio.sleep(max(0.0, next_run - loop.time()))
    return next_run


class OrderScheduler:
    def __init__(
        self,
        service: OrderQueueService,
        order_interval: float = ORDER_INTERVAL_SECONDS,
        drain_interval: float = DRAIN_INTERVAL_SECONDS,
    ) -> None:
        self.service = service
        self.order_interval = order_interval
        self.drain_interval = drain_interval
        self.tick = 0
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def start(self) -> None:
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._produce(), name="order-producer"),
            asyncio.create_task(self._drain(), name="order-drainer"),
        ]
        logger.info(
            f"scheduler started: order_interval={self.order_interval}s "
            f"drain_interval={self.drain_interval}s"
        )

    async def stop(self) -> None:
        self.service.stop()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info(f"scheduler stopped: queue_size={self.service.queue_size()}")

    async def _produce(self) -> None:
        next_run = asyncio.get_running_loop().time()
        while True:
            next_run = await _fixed_rate(self.order_interval, next_run)
            order = generate_order(self.tick)
            self.tick += 1
            self.service.enqueue(order)
            logger.info(f"order placed: category={order.category} magnitude={order.magnitude}")

    async def _drain(self) -> None:
        next_run = asyncio.get_running_loop().time()
        while True:
            next_run = await _fixed_rate(self.drain_interval, next_run)
            try:
                order = await asyncio.to_thread(self.service.timed_drain)
            except DrainInterrupted as exc:
                logger.warning(f"drain stopped: {exc}")
                return
            except Exception:
                logger.exception("drain failed")
                continue
            if order is not None:
                logger.info(f"order served: queue_size={self.service.queue_size()}")
