"""
Customer routes - loyalty and segment lookup by phone number.
"""
from typing import List

from fastapi import APIRouter, Depends

from order_tracker.api.dependencies import get_analytics
from order_tracker.api.middleware.error_handler import NotFoundException
from order_tracker.api.routes.orders import OrderResponse
from order_tracker.lib.logging import get_logger
from order_tracker.models.customers import CustomerSegment
from order_tracker.services.customer_analytics import CustomerAnalytics
from pydantic import BaseModel


logger = get_logger(__name__)
router = APIRouter(prefix="/customers", tags=["customers"])


class CustomerResponse(BaseModel):
    """Customer card: identity, loyalty and order history."""
    name: str
    phone: str
    total_orders: int
    loyalty_points: int
    segment: CustomerSegment
    history: List[OrderResponse]
    
    model_config = {"from_attributes": True}


@router.get("/{phone}", response_model=CustomerResponse)
def get_customer(
    phone: str,
    analytics: CustomerAnalytics = Depends(get_analytics),
) -> CustomerResponse:
    """Look up a customer by exact phone number; 404 if they have no orders."""
    customer = analytics.lookup_customer(phone)
    if customer is None:
        raise NotFoundException("Customer", phone)
    return CustomerResponse.model_validate(customer)
