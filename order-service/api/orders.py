"""
Order Queue Service - Orders Endpoints

POST /orders - Validates an order and queues it, returns 202
GET /orders - Returns the queue size and per-category order counts
"""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError
from response import APIResponse, ErrorCodes, error_response, success_response
from schemas import Order, OrderRequest, QueuedData, QueueStatus

# --- Logging ---
logger = logging.getLogger(__name__)

# --- Router ---
router = APIRouter(tags=["Orders"])


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]


@router.post(
    "/orders",
    summary="Place an order",
    description="""
Queues an order to be served by the periodic drain job.

```json
{"category": "ale", "magnitude": 2}
```

- `category`: non-empty label; only `light` and `ale` are counted in `orders_total`
- `magnitude`: integer >= 0, seconds of simulated serving time

The queue is unbounded; the request never waits for the order to be served.
    """,
    response_model=APIResponse,
    status_code=202,
    responses={
        202: {
            "description": "Order queued",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {"status": "queued", "queue_size": 4},
                        "error": None,
                    }
                }
            },
        },
        400: {
            "description": "Invalid JSON or invalid order",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "data": None,
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "magnitude: Input should be greater than or equal to 0",
                        },
                    }
                }
            },
        },
    },
)
async def place_order(request: Request):
    try:
        body = await request.json()
    except Exception:
        logger.error("invalid JSON body")
        return error_response(ErrorCodes.INVALID_JSON, "invalid JSON")

    try:
        payload = OrderRequest.model_validate(body)
    except ValidationError as exc:
        message = _first_error(exc)
        logger.error(f"invalid order: {message}")
        return error_response(ErrorCodes.VALIDATION_ERROR, message)

    service = request.app.state.order_service
    service.enqueue(Order(category=payload.category, magnitude=payload.magnitude))
    data = QueuedData(status="queued", queue_size=service.queue_size())
    logger.info(f"order queued: category={payload.category} magnitude={payload.magnitude}")
    return success_response(data.model_dump(), status_code=202)


@router.get(
    "/orders",
    summary="Queue status",
    description="Returns the number of unserved orders and the orders ever placed per counted category.",
    response_model=APIResponse,
)
async def queue_status(request: Request):
    service = request.app.state.order_service
    status = QueueStatus(queue_size=service.queue_size(), counts=service.counts())
    return success_response(status.model_dump())
