"""
Analytics routes - shop-wide dashboard.

- GET /analytics: Totals, repeat rate and top customers
- GET /analytics/summary: Order board counters
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from order_tracker.api.dependencies import get_analytics
from order_tracker.lib.logging import get_logger
from order_tracker.lib.settings import settings
from order_tracker.models.customers import AnalyticsSnapshot, StatusSummary
from order_tracker.services.customer_analytics import CustomerAnalytics


logger = get_logger(__name__)
router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "",
    response_model=AnalyticsSnapshot,
    summary="Get analytics snapshot",
    description="Total orders, unique and repeat customers, repeat rate and top customers",
)
def get_analytics_snapshot(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of top customers to return"),
    analytics: CustomerAnalytics = Depends(get_analytics),
) -> AnalyticsSnapshot:
    """
    Get the analytics snapshot.
    
    The top customers ranking is truncated to `limit` entries
    (default: the configured top_customers_limit).
    """
    snapshot = analytics.aggregate_snapshot()
    limit = limit or settings.top_customers_limit
    return snapshot.model_copy(update={"top_customers": snapshot.top_customers[:limit]})


@router.get("/summary", response_model=StatusSummary, summary="Get order board counters")
def get_status_summary(
    analytics: CustomerAnalytics = Depends(get_analytics),
) -> StatusSummary:
    """Total, completed, picked up and on-shelf order counts."""
    return analytics.status_summary()
