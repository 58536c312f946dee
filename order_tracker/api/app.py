"""
FastAPI application entry point with health check route.
"""
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_tracker.api.routes import analytics, customers, orders
from order_tracker.api.middleware.error_handler import (
    AppException,
    app_exception_handler,
    domain_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from order_tracker.lib.logging import get_logger, set_correlation_id
from order_tracker.lib.metrics import get_metrics_collector
from order_tracker.lib.settings import settings
from order_tracker.lib.storage import JsonOrderRepository
from order_tracker.services.errors import OrderTrackerError
from order_tracker.services.order_store import OrderStore

logger = get_logger(__name__)


# Correlation ID middleware
class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add correlation_id to all requests for tracing.
    Accepts X-Correlation-ID from incoming requests or generates a new one.
    """
    
    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))
        
        request.state.correlation_id = correlation_id
        set_correlation_id(correlation_id)
        
        logger.info(
            "Incoming request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            }
        )
        
        response = await call_next(request)
        
        response.headers["X-Correlation-ID"] = correlation_id
        
        logger.info(
            "Response sent",
            extra={"status_code": response.status_code},
        )
        
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager: loads the order collection on startup
    and wires the repository in as the store's save hook.
    """
    repository = JsonOrderRepository(settings.storage_path)
    app.state.order_store = OrderStore(repository.load(), on_change=repository.save)
    logger.info(f"{settings.app_name} starting up...")
    yield
    logger.info(f"{settings.app_name} shutting down...")


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Print-shop order tracking with customer loyalty, segments and analytics",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(CorrelationIdMiddleware)


# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(OrderTrackerError, domain_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# Include routers
app.include_router(orders.router)
app.include_router(customers.router)
app.include_router(analytics.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/metrics", include_in_schema=False, response_class=PlainTextResponse)
def metrics_endpoint():
    """
    Prometheus-compatible metrics endpoint.
    
    Metrics exposed:
    - orders_created_total: Orders accepted
    - order_transitions_total: Status changes by from/to status
    - orders_removed_total: Orders deleted
    """
    metrics = get_metrics_collector()
    return PlainTextResponse(
        content=metrics.export_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
