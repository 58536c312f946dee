"""
Pydantic models package.
"""
from order_tracker.models.orders import Order, OrderFilter, OrderStatus
from order_tracker.models.customers import (
    AnalyticsSnapshot,
    Customer,
    CustomerSegment,
    StatusSummary,
    TopCustomer,
)

__all__ = [
    "Order",
    "OrderFilter",
    "OrderStatus",
    "Customer",
    "CustomerSegment",
    "TopCustomer",
    "AnalyticsSnapshot",
    "StatusSummary",
]
