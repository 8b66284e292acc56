"""
Order Queue Service - Utilities

Deterministic order generator used by the periodic producer.
"""

from schemas import Order


def generate_order(tick: int) -> Order:
    """
    Build the order for the given producer tick.

    - magnitude cycles 0..4 (tick mod 5)
    - even ticks are "ale", odd ticks are "light"

    Args:
        tick: Producer tick, starting at 0

    Returns:
        The order for that tick
    """
    magnitude = tick % 5
    category = "ale" if tick % 2 == 0 else "light"
    return Order(category=category, magnitude=magnitude)
