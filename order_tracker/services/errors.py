"""
Domain errors raised by the order services.
"""
from typing import Optional


class OrderTrackerError(Exception):
    """Base class for order tracker domain errors."""


class ValidationError(OrderTrackerError, ValueError):
    """A required field is missing or blank."""
    
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class NotFoundError(OrderTrackerError, LookupError):
    """An operation referenced an order id that does not exist."""
    
    def __init__(self, order_id: str):
        self.order_id = order_id
        self.message = f"Order with id '{order_id}' not found"
        super().__init__(self.message)
