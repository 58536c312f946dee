"""
Order routes - the order board.

- GET /orders: List orders by status bucket and search text
- POST /orders: Take in a new order
- PUT /orders/{order_id}/completed: Mark completed / revoke completion
- PUT /orders/{order_id}/picked-up: Mark picked up / revoke pickup
- DELETE /orders/{order_id}: Delete an order
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from order_tracker.api.dependencies import get_analytics, get_order_store
from order_tracker.lib.logging import get_logger
from order_tracker.lib.settings import settings
from order_tracker.models.orders import OrderFilter, OrderStatus
from order_tracker.services.customer_analytics import CustomerAnalytics
from order_tracker.services.order_store import OrderStore


logger = get_logger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


# Pydantic schemas
class OrderResponse(BaseModel):
    """Order as shown on the board."""
    id: str
    customer_name: str
    phone: str
    details: str
    date_received: datetime
    completed: bool
    picked_up: bool
    completed_at: Optional[datetime] = None
    picked_at: Optional[datetime] = None
    status: OrderStatus
    
    model_config = {"from_attributes": True}


class OrderCreateRequest(BaseModel):
    """New order form."""
    phone: str = Field(description="Customer phone number (required)")
    customer_name: Optional[str] = Field(
        default=None,
        description="Customer name; the known name for this phone is used when blank",
    )
    details: str = Field(default="", description="What to print")


class CompletedUpdateRequest(BaseModel):
    completed: bool


class PickedUpUpdateRequest(BaseModel):
    picked_up: bool


@router.get("", response_model=List[OrderResponse])
def list_orders(
    filter: OrderFilter = Query(OrderFilter.ALL, description="Status bucket"),
    q: Optional[str] = Query(None, description="Search phone, name or details"),
    store: OrderStore = Depends(get_order_store),
) -> List[OrderResponse]:
    """
    List orders, most recent first.
    
    Query parameters:
    - filter: all, new, completed, picked, onshelf
    - q: case-insensitive substring search
    """
    orders = store.list(filter, q)
    return [OrderResponse.model_validate(o) for o in orders]


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreateRequest,
    store: OrderStore = Depends(get_order_store),
    analytics: CustomerAnalytics = Depends(get_analytics),
) -> OrderResponse:
    """Create an order; a blank phone number is rejected with 422."""
    customer_name = (payload.customer_name or "").strip()
    if not customer_name:
        customer_name = analytics.suggest_customer_name(
            payload.phone,
            min_length=settings.name_suggestion_min_length,
        ) or ""
    
    order = store.create(payload.phone, customer_name, payload.details)
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/completed", response_model=OrderResponse)
def set_completed(
    order_id: str,
    payload: CompletedUpdateRequest,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    """Mark an order completed, or revoke completion (also clears pickup)."""
    order = store.set_completed(order_id, payload.completed)
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/picked-up", response_model=OrderResponse)
def set_picked_up(
    order_id: str,
    payload: PickedUpUpdateRequest,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    """Mark an order picked up, or revoke pickup. Ignored for incomplete orders."""
    order = store.set_picked_up(order_id, payload.picked_up)
    return OrderResponse.model_validate(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_order(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
) -> Response:
    """Delete an order. Deleting an unknown order also returns 204."""
    store.remove(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
