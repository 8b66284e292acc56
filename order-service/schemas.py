"""
Order Queue Service - Schemas

Order value type plus pydantic models for request/response validation and Swagger documentation.
"""

from typing import Dict

from pydantic import BaseModel, Field

# --- Domain Models ---


class Order(BaseModel):
    """A unit of work: a category label and a magnitude used to simulate serving cost."""

    category: str = Field(
        ...,
        min_length=1,
        description="Order category, e.g. light or ale",
    )
    magnitude: int = Field(
        ...,
        ge=0,
        description="Units of simulated work needed to serve the order",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {"category": "ale", "magnitude": 2}},
    }


# --- Request Models ---


class OrderRequest(BaseModel):
    """JSON request body for POST /orders."""

    category: str = Field(
        ...,
        min_length=1,
        description="Order category; only known categories are counted",
    )
    magnitude: int = Field(
        ...,
        ge=0,
        description="Units of simulated serving time",
    )

    model_config = {
        "json_schema_extra": {"example": {"category": "light", "magnitude": 3}},
    }


# --- Response Models ---


class QueuedData(BaseModel):
    """Data returned once an order is queued."""

    status: str = Field(..., description="Status of the request")
    queue_size: int = Field(..., description="Orders waiting after this one was queued")

    model_config = {"json_schema_extra": {"example": {"status": "queued", "queue_size": 4}}}


class QueueStatus(BaseModel):
    """Current queue state."""

    queue_size: int = Field(..., description="Orders waiting to be served")
    counts: Dict[str, int] = Field(..., description="Orders ever placed, per known category")

    model_config = {
        "json_schema_extra": {"example": {"queue_size": 3, "counts": {"light": 12, "ale": 13}}}
    }
