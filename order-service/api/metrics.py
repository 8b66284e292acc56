"""
Order Queue Service - Metrics Endpoints

GET /metrics - Prometheus text exposition (orders counters, queue gauge, serve timer)
GET /metrics/summary - Same figures as a JSON snapshot
"""

from fastapi import APIRouter, Request
from fastapi.responses import Response

router = APIRouter(tags=["Metrics"])


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Scrape endpoint in the Prometheus text format. The queue size gauge is read at scrape time.",
    response_class=Response,
)
async def get_metrics(request: Request):
    metrics = request.app.state.metrics
    return Response(content=metrics.render(), media_type=metrics.content_type)


@router.get(
    "/metrics/summary",
    summary="Service metrics summary",
    description="Returns uptime, request count, queue size, per-category order counts and serve counts.",
    responses={
        200: {
            "description": "Metrics retrieved successfully",
            "content": {
                "application/json": {
                    "example": {
                        "service": "orders",
                        "uptime_seconds": 3600,
                        "requests_total": 500,
                        "last_request_at": "2025-11-30T19:00:00+00:00",
                        "queue_size": 3,
                        "orders": {"light": 900, "ale": 900},
                        "served": 720,
                        "interrupted": 0,
                    }
                }
            },
        },
    },
)
async def get_metrics_summary(request: Request):
    return request.app.state.metrics.snapshot()
