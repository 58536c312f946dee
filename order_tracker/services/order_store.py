"""
OrderStore - authoritative in-memory order collection.

Owns the order list (most recent first) and enforces the lifecycle rules:
- picked_up implies completed
- completed_at is set exactly while completed
- picked_at is set exactly while picked_up

All mutations go through `apply_transition` and are serialized by a lock.
Callers receive frozen `Order` snapshots, never the live list.
"""
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, Iterable, Optional, Sequence
from uuid import uuid4

from order_tracker.lib.logging import get_logger
from order_tracker.lib.metrics import MetricsCollector, get_metrics_collector
from order_tracker.models.orders import Order, OrderFilter
from order_tracker.services.errors import NotFoundError, ValidationError


logger = get_logger(__name__)

PLACEHOLDER_NAME = "-"

SaveHook = Callable[[Sequence[Order]], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def apply_transition(order: Order, completed: bool, picked_up: bool, now: datetime) -> Order:
    """
    Move an order to the status described by the two flags.
    
    picked_up is clamped to False when completed is False. Timestamps are
    stamped only for flags that turn on and cleared for flags that turn off;
    a flag that stays on keeps its original timestamp.
    
    Returns:
        The same order if nothing changes, otherwise an updated copy
    """
    picked_up = picked_up and completed
    if order.completed == completed and order.picked_up == picked_up:
        return order
    
    if not completed:
        completed_at = None
    elif order.completed:
        completed_at = order.completed_at
    else:
        completed_at = now
    
    if not picked_up:
        picked_at = None
    elif order.picked_up:
        picked_at = order.picked_at
    else:
        picked_at = now
    
    return order.model_copy(
        update={
            "completed": completed,
            "picked_up": picked_up,
            "completed_at": completed_at,
            "picked_at": picked_at,
        }
    )


class OrderStore:
    """
    Single-writer owner of the order collection.
    
    Args:
        orders: Initial collection (load hook), most recent first
        on_change: Save hook, called with a snapshot after every change
        clock: Returns the current time (defaults to UTC now)
        metrics: Metrics collector (defaults to the global collector)
    """
    
    def __init__(
        self,
        orders: Iterable[Order] = (),
        on_change: Optional[SaveHook] = None,
        clock: Optional[Callable[[], datetime]] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self._orders: list[Order] = list(orders)
        self._on_change = on_change
        self._clock = clock or _utcnow
        self._metrics = metrics or get_metrics_collector()
        self._lock = RLock()
        logger.info("OrderStore initialized", extra={"order_count": len(self._orders)})
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
    
    # -------------------- Reads --------------------
    
    def snapshot(self) -> tuple[Order, ...]:
        """Return a read-only copy of the collection, most recent first."""
        with self._lock:
            return tuple(self._orders)
    
    def get(self, order_id: str) -> Order:
        """Return the order with the given id or raise NotFoundError."""
        with self._lock:
            return self._orders[self._index_of(order_id)]
    
    def list(self, status_filter: OrderFilter = OrderFilter.ALL, query: Optional[str] = None) -> "list[Order]":
        """
        List orders in the collection's most-recent-first order.
        
        Args:
            status_filter: Status bucket (all, new, completed, picked, onshelf)
            query: Optional case-insensitive substring matched against
                phone, customer name or details
        """
        status_filter = OrderFilter(status_filter)
        orders = self.snapshot()
        return [
            o for o in orders
            if status_filter.matches(o) and (not query or o.matches_query(query))
        ]
    
    # -------------------- Mutations --------------------
    
    def create(self, phone: str, customer_name: str = "", details: str = "") -> Order:
        """
        Create a new order and put it at the head of the collection.
        
        Raises:
            ValidationError: If phone is empty or whitespace-only
        """
        phone = (phone or "").strip()
        if not phone:
            logger.warning("Rejected order without phone number")
            raise ValidationError("Phone number required", field="phone")
        
        order = Order(
            id=str(uuid4()),
            customer_name=(customer_name or "").strip() or PLACEHOLDER_NAME,
            phone=phone,
            details=(details or "").strip(),
            date_received=self._clock(),
        )
        with self._lock:
            self._commit([order, *self._orders])
        
        self._metrics.increment_created()
        logger.info("Order created", extra={"order_id": order.id, "phone": order.phone})
        return order
    
    def set_completed(self, order_id: str, completed: bool) -> Order:
        """
        Mark an order completed or revoke its completion.
        
        Revoking completion also clears the pickup, so a picked-up order
        goes straight back to new.
        
        Raises:
            NotFoundError: If the order id does not exist
        """
        with self._lock:
            index = self._index_of(order_id)
            current = self._orders[index]
            return self._replace(index, current, completed, current.picked_up)
    
    def set_picked_up(self, order_id: str, picked_up: bool) -> Order:
        """
        Mark an order picked up or revoke the pickup.
        
        Has no effect on an order that is not completed.
        
        Raises:
            NotFoundError: If the order id does not exist
        """
        with self._lock:
            index = self._index_of(order_id)
            current = self._orders[index]
            if not current.completed:
                logger.debug(
                    "Ignored pickup change on incomplete order",
                    extra={"order_id": order_id},
                )
                return current
            return self._replace(index, current, current.completed, picked_up)
    
    def remove(self, order_id: str) -> None:
        """Delete an order. Removing an unknown id is a no-op."""
        with self._lock:
            remaining = [o for o in self._orders if o.id != order_id]
            if len(remaining) == len(self._orders):
                logger.debug("Ignored removal of unknown order", extra={"order_id": order_id})
                return
            self._commit(remaining)
        
        self._metrics.increment_removed()
        logger.info("Order removed", extra={"order_id": order_id})
    
    # -------------------- Internals --------------------
    
    def _index_of(self, order_id: str) -> int:
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                return index
        logger.warning("Order not found", extra={"order_id": order_id})
        raise NotFoundError(order_id)
    
    def _replace(self, index: int, current: Order, completed: bool, picked_up: bool) -> Order:
        updated = apply_transition(current, completed, picked_up, self._clock())
        if updated is current:
            return current
        
        candidate = list(self._orders)
        candidate[index] = updated
        self._commit(candidate)
        
        self._metrics.increment_transitions(current.status.value, updated.status.value)
        logger.info(
            "Order status changed",
            extra={
                "order_id": updated.id,
                "from_status": current.status.value,
                "to_status": updated.status.value,
            },
        )
        return updated
    
    def _commit(self, candidate: "list[Order]") -> None:
        # Caller holds the lock; the collection is replaced only after the save hook returns
        if self._on_change is not None:
            self._on_change(tuple(candidate))
        self._orders = candidate
