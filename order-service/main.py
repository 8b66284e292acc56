"""
Order Queue Service

Application entry point. Builds the order service and its metrics, sets up
the FastAPI app, includes all routes and runs the periodic jobs.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from api import router
from config import API_VERSION, PORT, SCHEDULER_ENABLED, SERVICE_DESCRIPTION, SERVICE_NAME
from fastapi import FastAPI, Request
from metrics import OrderMetrics
from scheduler import OrderScheduler
from service import OrderQueueService

# --- Logging ---
logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def create_app(
    service: Optional[OrderQueueService] = None,
    scheduler_enabled: bool = SCHEDULER_ENABLED,
) -> FastAPI:
    """
    Build the app around a single order service.

    Args:
        service: Service to expose; a new one with its own registry by default
        scheduler_enabled: Run the producer and drain jobs for the app's lifetime
    """
    if service is None:
        service = OrderQueueService(OrderMetrics())
    scheduler = OrderScheduler(service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler_enabled:
            scheduler.start()
        yield
        if scheduler_enabled:
            await scheduler.stop()

    app = FastAPI(
        title=SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.order_service = service
    app.state.metrics = service.metrics
    app.state.scheduler = scheduler

    # --- Metrics middleware ---
    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        response = await call_next(request)
        request.app.state.metrics.record_request(request.url.path)
        return response

    # --- Include routes ---
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    logger.info(f"starting {SERVICE_NAME} on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
