"""
Order Queue Service - Errors
"""


class DrainInterrupted(Exception):
    """Raised when the wait serving an order is cut short by shutdown.

    The order was already removed from the queue and is not put back, so
    serving is at-most-once.
    """

    def __init__(self, order):
        super().__init__(f"serving interrupted: category={order.category} magnitude={order.magnitude}")
        self.order = order
