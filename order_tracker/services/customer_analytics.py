"""
CustomerAnalytics - customer loyalty, segments and shop-wide statistics.

Every function is a pure derivation over an order sequence supplied by the
caller; nothing here mutates the input or keeps state between calls.

Chronology: order sequences are read most recent first, which is the
order OrderStore keeps. A customer's display name therefore comes from the
first order encountered for their phone.

Used by: Customer lookup and analytics endpoints
"""
from typing import Iterable, Optional, Sequence

from order_tracker.lib.logging import get_logger, log_with_context
from order_tracker.models.customers import (
    AnalyticsSnapshot,
    Customer,
    CustomerSegment,
    StatusSummary,
    TopCustomer,
)
from order_tracker.models.orders import Order


logger = get_logger(__name__)

LOYALTY_POINTS_PER_COMPLETED_ORDER = 5

# Highest threshold wins
SEGMENT_THRESHOLDS: tuple[tuple[int, CustomerSegment], ...] = (
    (12, CustomerSegment.VIP),
    (5, CustomerSegment.FREQUENT),
    (2, CustomerSegment.RETURNING),
)


def segment_for(total_orders: int) -> CustomerSegment:
    """Map a customer's total order count to a segment."""
    for threshold, segment in SEGMENT_THRESHOLDS:
        if total_orders >= threshold:
            return segment
    return CustomerSegment.NEW


def loyalty_points(orders: Iterable[Order]) -> int:
    """5 points per completed order."""
    return LOYALTY_POINTS_PER_COMPLETED_ORDER * sum(1 for o in orders if o.completed)


def lookup_customer(orders: Sequence[Order], phone: str) -> Optional[Customer]:
    """
    Build the customer view for a phone number.
    
    Args:
        orders: Order collection, most recent first
        phone: Exact phone number to match
    
    Returns:
        Customer, or None if no order carries this phone
    """
    history = [o for o in orders if o.phone == phone]
    if not history:
        return None
    
    total_orders = len(history)
    return Customer(
        name=history[0].customer_name,
        phone=phone,
        history=history,
        total_orders=total_orders,
        loyalty_points=loyalty_points(history),
        segment=segment_for(total_orders),
    )


def suggest_customer_name(orders: Sequence[Order], phone: str, min_length: int = 4) -> Optional[str]:
    """
    Suggest the known name for a phone typed into the order form.
    
    Returns None until at least `min_length` characters are entered or when
    the phone has no orders yet.
    """
    phone = (phone or "").strip()
    if len(phone) < min_length:
        return None
    customer = lookup_customer(orders, phone)
    return customer.name if customer else None


def top_customers(orders: Sequence[Order], limit: Optional[int] = None) -> list[TopCustomer]:
    """
    Rank customers by order count, descending.
    
    Ties keep the order in which phones were first encountered.
    
    Args:
        orders: Order collection, most recent first
        limit: Truncate the ranking to this many entries (None for all)
    """
    counts: dict[str, int] = {}
    names: dict[str, str] = {}
    for order in orders:
        counts[order.phone] = counts.get(order.phone, 0) + 1
        names.setdefault(order.phone, order.customer_name)
    
    # dicts keep insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [
        TopCustomer(phone=phone, name=names[phone], order_count=count)
        for phone, count in ranked
    ]


def aggregate_snapshot(orders: Sequence[Order]) -> AnalyticsSnapshot:
    """
    Compute shop-wide analytics.
    
    Returns:
        AnalyticsSnapshot with the full (untruncated) top customer ranking.
        The repeat rate is 0 for an empty collection.
    """
    ranking = top_customers(orders)
    unique_customers = len(ranking)
    repeat_customers = sum(1 for c in ranking if c.order_count >= 2)
    
    repeat_rate_percent = 0
    if unique_customers:
        repeat_rate_percent = _round_half_up(100 * repeat_customers / unique_customers)
    
    return AnalyticsSnapshot(
        total_orders=len(orders),
        unique_customers=unique_customers,
        repeat_customers=repeat_customers,
        repeat_rate_percent=repeat_rate_percent,
        top_customers=ranking,
    )


def status_summary(orders: Sequence[Order]) -> StatusSummary:
    """Counters for the order board header."""
    return StatusSummary(
        total=len(orders),
        completed=sum(1 for o in orders if o.completed),
        picked_up=sum(1 for o in orders if o.picked_up),
        on_shelf=sum(1 for o in orders if o.completed and not o.picked_up),
    )


def _round_half_up(value: float) -> int:
    # round() uses banker's rounding; percentages round .5 up
    return int(value + 0.5)


class CustomerAnalytics:
    """
    Read-only analytics over an order snapshot.
    
    Wraps the module functions for callers that pass a snapshot around,
    e.g. the API layer.
    """
    
    def __init__(self, orders: Sequence[Order]):
        self.orders = tuple(orders)
    
    def lookup_customer(self, phone: str) -> Optional[Customer]:
        customer = lookup_customer(self.orders, phone)
        logger.debug("Customer lookup", extra={"phone": phone, "found": customer is not None})
        return customer
    
    def suggest_customer_name(self, phone: str, min_length: int = 4) -> Optional[str]:
        return suggest_customer_name(self.orders, phone, min_length=min_length)
    
    def aggregate_snapshot(self) -> AnalyticsSnapshot:
        snapshot = aggregate_snapshot(self.orders)
        log_with_context(
            logger,
            "info",
            "Analytics snapshot calculated",
            total_orders=snapshot.total_orders,
            unique_customers=snapshot.unique_customers,
            repeat_rate_percent=snapshot.repeat_rate_percent,
        )
        return snapshot
    
    def top_customers(self, limit: Optional[int] = None) -> list[TopCustomer]:
        return top_customers(self.orders, limit=limit)
    
    def status_summary(self) -> StatusSummary:
        return status_summary(self.orders)


def get_customer_analytics(orders: Sequence[Order]) -> CustomerAnalytics:
    """
    Get CustomerAnalytics instance.
    
    Args:
        orders: Order snapshot
        
    Returns:
        CustomerAnalytics instance
    """
    return CustomerAnalytics(orders)
