"""
API dependencies for FastAPI dependency injection.

The order store lives on the application state; analytics are built per
request from a fresh snapshot of it.
"""
from fastapi import Depends, Request

from order_tracker.services.customer_analytics import CustomerAnalytics, get_customer_analytics
from order_tracker.services.order_store import OrderStore


def get_order_store(request: Request) -> OrderStore:
    """Dependency returning the application's order store."""
    return request.app.state.order_store


def get_analytics(store: OrderStore = Depends(get_order_store)) -> CustomerAnalytics:
    """Dependency returning analytics over the current order snapshot."""
    return get_customer_analytics(store.snapshot())
