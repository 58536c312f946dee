"""
Unit tests for customer analytics.

Tests validate:
- Segment thresholds
- Loyalty points
- Customer lookup (name, history order, not found)
- Aggregate snapshot, repeat rate and top customer ranking
- Status summary and name suggestion
"""
import logging

import pytest

from order_tracker.models.customers import CustomerSegment
from order_tracker.services.customer_analytics import (
    CustomerAnalytics,
    aggregate_snapshot,
    lookup_customer,
    segment_for,
    status_summary,
    suggest_customer_name,
    top_customers,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "total_orders, expected",
    [
        (0, CustomerSegment.NEW),
        (1, CustomerSegment.NEW),
        (2, CustomerSegment.RETURNING),
        (4, CustomerSegment.RETURNING),
        (5, CustomerSegment.FREQUENT),
        (11, CustomerSegment.FREQUENT),
        (12, CustomerSegment.VIP),
        (13, CustomerSegment.VIP),
    ],
)
def test_segment_thresholds(total_orders, expected):
    """Thresholds are inclusive lower bounds, highest wins."""
    assert segment_for(total_orders) == expected


@pytest.mark.unit
def test_segment_values_are_display_labels():
    assert [s.value for s in CustomerSegment] == ["New", "Returning", "Frequent", "VIP"]


@pytest.mark.unit
def test_loyalty_points_count_completed_orders_only(store):
    """3 orders with 2 completed earn exactly 10 points."""
    orders = [store.create("555-0001") for _ in range(3)]
    store.set_completed(orders[0].id, True)
    store.set_completed(orders[1].id, True)
    
    customer = lookup_customer(store.snapshot(), "555-0001")
    
    assert customer.total_orders == 3
    assert customer.loyalty_points == 10


@pytest.mark.unit
def test_repeat_customer_scenario(store):
    """Three orders make a Returning customer; completing one earns 5 points."""
    orders = [store.create("555-0001", "Ada") for _ in range(3)]
    
    customer = lookup_customer(store.snapshot(), "555-0001")
    assert customer.total_orders == 3
    assert customer.loyalty_points == 0
    assert customer.segment == CustomerSegment.RETURNING
    
    store.set_completed(orders[1].id, True)
    
    customer = lookup_customer(store.snapshot(), "555-0001")
    assert customer.loyalty_points == 5


@pytest.mark.unit
def test_lookup_uses_most_recent_name_and_history_order(store):
    """The newest order's name wins; history stays most recent first."""
    first = store.create("555-0001", "A. Lovelace")
    store.create("555-0002", "Grace")
    latest = store.create("555-0001", "Ada Lovelace")
    
    customer = lookup_customer(store.snapshot(), "555-0001")
    
    assert customer.name == "Ada Lovelace"
    assert customer.phone == "555-0001"
    assert [o.id for o in customer.history] == [latest.id, first.id]


@pytest.mark.unit
def test_lookup_requires_exact_phone(store):
    store.create("555-0001")
    
    assert lookup_customer(store.snapshot(), "555-000") is None
    assert lookup_customer(store.snapshot(), "555-0009") is None
    assert lookup_customer((), "555-0001") is None


@pytest.mark.unit
def test_empty_snapshot():
    """An empty collection gives all zeros and no division error."""
    snapshot = aggregate_snapshot([])
    
    assert snapshot.total_orders == 0
    assert snapshot.unique_customers == 0
    assert snapshot.repeat_customers == 0
    assert snapshot.repeat_rate_percent == 0
    assert snapshot.top_customers == []


@pytest.mark.unit
def test_snapshot_two_customers(store):
    """A with 5 orders and B with 1 gives a 50% repeat rate."""
    for _ in range(5):
        store.create("A", "Alice")
    store.create("B", "Bob")
    
    snapshot = aggregate_snapshot(store.snapshot())
    
    assert snapshot.total_orders == 6
    assert snapshot.unique_customers == 2
    assert snapshot.repeat_customers == 1
    assert snapshot.repeat_rate_percent == 50
    assert [(c.phone, c.order_count) for c in snapshot.top_customers] == [("A", 5), ("B", 1)]


@pytest.mark.unit
@pytest.mark.parametrize(
    "phones, expected",
    [
        (["A", "A", "B", "C"], 33),
        (["A", "A", "B", "B", "C"], 67),
        (["A", "A", "B", "C", "D", "E", "F", "G", "H"], 13),
    ],
)
def test_repeat_rate_rounds_half_up(store, phones, expected):
    """1/3 is 33%, 2/3 is 67%, 1/8 (12.5%) rounds up to 13%."""
    for phone in phones:
        store.create(phone)
    
    assert aggregate_snapshot(store.snapshot()).repeat_rate_percent == expected


@pytest.mark.unit
def test_top_customers_ties_keep_encounter_order(store):
    """Equal counts keep the order in which phones first appear."""
    for phone in ["C", "B", "A", "B", "C"]:
        store.create(phone)
    
    # Most recent first: C, B, A, B, C
    ranking = top_customers(store.snapshot())
    
    assert [(c.phone, c.order_count) for c in ranking] == [("C", 2), ("B", 2), ("A", 1)]


@pytest.mark.unit
def test_top_customers_name_and_limit(store):
    """Names come from each customer's latest order; limit truncates."""
    store.create("A", "Old Name")
    store.create("A", "New Name")
    store.create("B", "Bob")
    
    ranking = top_customers(store.snapshot(), limit=1)
    
    assert len(ranking) == 1
    assert ranking[0].name == "New Name"


@pytest.mark.unit
def test_snapshot_returns_full_ranking(store):
    for i in range(8):
        store.create(f"555-00{i:02d}")
    
    assert len(aggregate_snapshot(store.snapshot()).top_customers) == 8


@pytest.mark.unit
def test_status_summary(store):
    new = store.create("1")
    shelf = store.create("2")
    picked = store.create("3")
    store.set_completed(shelf.id, True)
    store.set_completed(picked.id, True)
    store.set_picked_up(picked.id, True)
    
    summary = status_summary(store.snapshot())
    
    assert summary.total == 3
    assert summary.completed == 2
    assert summary.picked_up == 1
    assert summary.on_shelf == 1
    assert new.completed is False


@pytest.mark.unit
def test_suggest_customer_name(store):
    """A known name is suggested once enough of the phone is typed."""
    store.create("555-0001", "Ada")
    orders = store.snapshot()
    
    assert suggest_customer_name(orders, "555-0001") == "Ada"
    assert suggest_customer_name(orders, " 555-0001 ") == "Ada"
    assert suggest_customer_name(orders, "555") is None
    assert suggest_customer_name(orders, "555-9999") is None
    assert suggest_customer_name(orders, "555", min_length=3) is None


@pytest.mark.unit
def test_analytics_does_not_mutate_input(store):
    store.create("A")
    store.create("A")
    orders = list(store.snapshot())
    before = list(orders)
    
    aggregate_snapshot(orders)
    lookup_customer(orders, "A")
    top_customers(orders, limit=1)
    
    assert orders == before


@pytest.mark.unit
def test_customer_analytics_service(store):
    """The service class wraps the functions over a fixed snapshot."""
    order = store.create("A", "Alice")
    analytics = CustomerAnalytics(store.snapshot())
    
    store.set_completed(order.id, True)
    
    assert analytics.lookup_customer("A").loyalty_points == 0
    assert analytics.aggregate_snapshot().unique_customers == 1
    assert analytics.top_customers(limit=5)[0].name == "Alice"
    assert analytics.status_summary().completed == 0
    assert analytics.suggest_customer_name("A", min_length=1) == "Alice"


@pytest.mark.unit
def test_snapshot_is_logged_with_context(store, caplog):
    """The service logs snapshot figures as structured context fields."""
    store.create("A")
    store.create("A")
    
    with caplog.at_level(logging.INFO, logger="order_tracker.services.customer_analytics"):
        CustomerAnalytics(store.snapshot()).aggregate_snapshot()
    
    record = next(r for r in caplog.records if r.getMessage() == "Analytics snapshot calculated")
    assert record.extra_fields == {
        "total_orders": 2,
        "unique_customers": 1,
        "repeat_rate_percent": 100,
    }
