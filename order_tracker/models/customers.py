"""
Customer and analytics models.

Customers are never stored: they are views derived from the orders that
share a phone number.
"""
import enum

from pydantic import BaseModel, Field

from order_tracker.models.orders import Order


class CustomerSegment(str, enum.Enum):
    """Tier label derived from a customer's total order count."""
    NEW = "New"
    RETURNING = "Returning"
    FREQUENT = "Frequent"
    VIP = "VIP"


class Customer(BaseModel):
    """Customer view over all orders sharing a phone number."""
    name: str
    phone: str
    history: list[Order] = Field(description="Orders for this phone, most recent first")
    total_orders: int
    loyalty_points: int
    segment: CustomerSegment


class TopCustomer(BaseModel):
    """One entry of the top customers ranking."""
    phone: str
    name: str
    order_count: int


class AnalyticsSnapshot(BaseModel):
    """Shop-wide analytics, recomputed on every request."""
    total_orders: int = 0
    unique_customers: int = 0
    repeat_customers: int = 0
    repeat_rate_percent: int = Field(default=0, description="Repeat customers as % of unique customers")
    top_customers: list[TopCustomer] = Field(default_factory=list)


class StatusSummary(BaseModel):
    """Order board counters."""
    total: int = 0
    completed: int = 0
    picked_up: int = 0
    on_shelf: int = 0
