"""
Order model - a single print job tracked through its fulfillment lifecycle.
"""
from datetime import datetime
from typing import Optional
import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class OrderStatus(str, enum.Enum):
    """Order status state machine: new → completed → picked_up."""
    NEW = "new"
    COMPLETED = "completed"
    PICKED_UP = "picked_up"


class OrderFilter(str, enum.Enum):
    """Listing filters offered to the order board."""
    ALL = "all"
    NEW = "new"
    COMPLETED = "completed"
    PICKED = "picked"
    ON_SHELF = "onshelf"
    
    def matches(self, order: "Order") -> bool:
        """Return True if the order belongs to this filter bucket."""
        if self is OrderFilter.NEW:
            return not order.completed
        if self is OrderFilter.COMPLETED:
            return order.completed
        if self is OrderFilter.PICKED:
            return order.picked_up
        if self is OrderFilter.ON_SHELF:
            return order.completed and not order.picked_up
        return True


class Order(BaseModel):
    """
    Order entity - immutable snapshot of a print job.
    
    The two booleans are the stored form of the status; `status` is the
    derived tagged view. Field aliases are camelCase so exported order
    collections keep their existing JSON shape.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
    
    id: str
    customer_name: str = "-"
    phone: str = Field(min_length=1)
    details: str = ""
    date_received: datetime
    
    # Lifecycle flags
    completed: bool = False
    picked_up: bool = False
    completed_at: Optional[datetime] = None
    picked_at: Optional[datetime] = None
    
    @model_validator(mode="after")
    def check_lifecycle_flags(self) -> "Order":
        """Reject records whose flags and timestamps disagree."""
        if self.picked_up and not self.completed:
            raise ValueError("an order cannot be picked up before it is completed")
        if (self.completed_at is not None) != self.completed:
            raise ValueError("completed_at must be set exactly when the order is completed")
        if (self.picked_at is not None) != self.picked_up:
            raise ValueError("picked_at must be set exactly when the order is picked up")
        return self
    
    @property
    def status(self) -> OrderStatus:
        if self.picked_up:
            return OrderStatus.PICKED_UP
        if self.completed:
            return OrderStatus.COMPLETED
        return OrderStatus.NEW
    
    def matches_query(self, query: str) -> bool:
        """Case-insensitive substring match against phone, name or details."""
        needle = query.lower()
        return (
            needle in self.phone.lower()
            or needle in (self.customer_name or "").lower()
            or needle in (self.details or "").lower()
        )
    
    def __repr__(self) -> str:
        return f"<Order(id={self.id}, phone={self.phone}, status={self.status.value})>"
