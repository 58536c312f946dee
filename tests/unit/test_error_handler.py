"""
Tests for error handler middleware and custom exceptions.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from order_tracker.api.middleware.error_handler import (
    AppException,
    NotFoundException,
    ValidationException,
    app_exception_handler,
    domain_exception_handler,
    to_app_exception,
)
from order_tracker.services.errors import NotFoundError, OrderTrackerError, ValidationError


@pytest.mark.unit
def test_app_exception_creation():
    """Test creating custom AppException."""
    exc = AppException(
        message="Test error",
        status_code=500,
        details={"key": "value"},
    )
    
    assert exc.message == "Test error"
    assert exc.status_code == 500
    assert exc.details == {"key": "value"}


@pytest.mark.unit
def test_not_found_exception():
    """Test NotFoundException creation."""
    exc = NotFoundException("Order", "123")
    
    assert exc.message == "Order with id '123' not found"
    assert exc.status_code == 404
    assert exc.details["resource"] == "Order"
    assert exc.details["resource_id"] == "123"


@pytest.mark.unit
def test_not_found_exception_without_id():
    """Test NotFoundException without resource ID."""
    exc = NotFoundException("Customer")
    
    assert exc.message == "Customer not found"
    assert exc.status_code == 404


@pytest.mark.unit
def test_validation_exception():
    """Test ValidationException creation."""
    exc = ValidationException("Validation failed", errors={"phone": "required"})
    
    assert exc.status_code == 422
    assert exc.details["errors"] == {"phone": "required"}


@pytest.mark.unit
def test_domain_errors_translate_to_http():
    """Domain errors map onto 404 / 422 / 400."""
    not_found = to_app_exception(NotFoundError("abc"))
    invalid = to_app_exception(ValidationError("Phone number required", field="phone"))
    other = to_app_exception(OrderTrackerError("odd"))
    
    assert not_found.status_code == 404
    assert not_found.details["resource_id"] == "abc"
    assert invalid.status_code == 422
    assert invalid.details["errors"] == {"phone": "Phone number required"}
    assert other.status_code == 400


@pytest.mark.unit
def test_domain_errors_keep_builtin_bases():
    assert isinstance(ValidationError("x"), ValueError)
    assert isinstance(NotFoundError("x"), LookupError)


@pytest.mark.integration
def test_handlers_in_route():
    """Test exception handlers in actual routes."""
    app = FastAPI()
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(OrderTrackerError, domain_exception_handler)
    
    @app.get("/app-error")
    async def app_error():
        raise NotFoundException("Order", "123")
    
    @app.get("/domain-error")
    async def domain_error():
        raise NotFoundError("456")
    
    client = TestClient(app)
    
    response = client.get("/app-error")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Order with id '123' not found"
    assert data["correlation_id"] == "unknown"
    assert data["details"]["resource"] == "Order"
    
    response = client.get("/domain-error")
    assert response.status_code == 404
    assert response.json()["details"]["resource_id"] == "456"


@pytest.mark.integration
def test_unknown_route_uses_error_envelope():
    """Starlette 404s come back in the same envelope."""
    from order_tracker.api.app import app
    
    response = TestClient(app).get("/no-such-route", headers={"X-Correlation-ID": "req-9"})
    
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "correlation_id": "req-9"}
