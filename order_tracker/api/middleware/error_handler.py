"""
Error responses for the order tracker API.

Every error leaves the API as {"error", "correlation_id", "details"?}.
Domain errors from the order services map to 404 / 422; request body
and query problems use the same envelope.
"""
import logging
from typing import Optional, Dict, Any
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_tracker.lib.logging import get_logger
from order_tracker.services.errors import NotFoundError, OrderTrackerError, ValidationError

logger = get_logger(__name__)


class AppException(Exception):
    """Base application exception carrying an HTTP status."""
    
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(AppException):
    """Order or customer not found."""
    
    def __init__(self, resource: str, resource_id: Optional[str] = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "resource_id": resource_id},
        )


class ValidationException(AppException):
    """A required field is missing or blank."""
    
    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"errors": errors or {}},
        )


def to_app_exception(exc: OrderTrackerError) -> AppException:
    """Translate a domain error into its HTTP counterpart."""
    if isinstance(exc, NotFoundError):
        return NotFoundException("Order", exc.order_id)
    if isinstance(exc, ValidationError):
        errors = {exc.field: exc.message} if exc.field else {}
        return ValidationException(exc.message, errors=errors)
    return AppException(str(exc))


def error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Build the error envelope and log it (warning for 4xx, error for 5xx)."""
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    
    log_level = logging.WARNING if status_code < 500 else logging.ERROR
    logger.log(
        log_level,
        f"Request failed: {message}",
        extra={
            "status_code": status_code,
            "path": request.url.path,
            "method": request.method,
            "details": details or {},
        },
        exc_info=status_code >= 500,
    )
    
    content = {"error": message, "correlation_id": correlation_id}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return error_response(request, exc.status_code, exc.message, exc.details)


async def domain_exception_handler(request: Request, exc: OrderTrackerError) -> JSONResponse:
    """Handler for errors raised by the order services."""
    return await app_exception_handler(request, to_app_exception(exc))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request body or query parameters."""
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        {"errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and methods."""
    return error_response(request, exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else, e.g. a failed save; details stay in the log."""
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
