"""
Order lifecycle and customer analytics services.
"""
from order_tracker.services.errors import NotFoundError, OrderTrackerError, ValidationError
from order_tracker.services.order_store import OrderStore, apply_transition
from order_tracker.services.customer_analytics import (
    CustomerAnalytics,
    aggregate_snapshot,
    lookup_customer,
    segment_for,
    status_summary,
    suggest_customer_name,
    top_customers,
)

__all__ = [
    "OrderTrackerError",
    "ValidationError",
    "NotFoundError",
    "OrderStore",
    "apply_transition",
    "CustomerAnalytics",
    "aggregate_snapshot",
    "lookup_customer",
    "segment_for",
    "status_summary",
    "suggest_customer_name",
    "top_customers",
]
