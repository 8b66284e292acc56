"""
Order Queue Service - Configuration

All environment variables, constants, and settings in one place.
"""

import os

# --- Scheduling ---
ORDER_INTERVAL_SECONDS = float(os.environ.get("ORDER_INTERVAL_SECONDS", "2"))
DRAIN_INTERVAL_SECONDS = float(os.environ.get("DRAIN_INTERVAL_SECONDS", "5"))
SCHEDULER_ENABLED = os.environ.get("SCHEDULER_ENABLED", "true").lower() in ("1", "true", "yes")

# --- Processing Configuration ---
SECONDS_PER_UNIT = float(os.environ.get("SECONDS_PER_UNIT", "1"))  # wait per unit of magnitude

# --- Orders ---
KNOWN_CATEGORIES = tuple(
    c.strip() for c in os.environ.get("KNOWN_CATEGORIES", "light,ale").split(",") if c.strip()
)

# --- Server ---
PORT = int(os.environ.get("PORT", "8080"))

# --- API Configuration ---
API_VERSION = "1.0.0"

# --- Service Info ---
SERVICE_NAME = "Order Queue Service"
SERVICE_DESCRIPTION = """
## Overview
Toy order service instrumented with custom application metrics.

## Features
- In-memory FIFO queue of orders, fed every 2 seconds
- Serves the oldest order every 5 seconds (1 second per unit of magnitude)
- Counts orders per category, gauges the queue size, times every serve
- Prometheus exposition on `/metrics`
"""
