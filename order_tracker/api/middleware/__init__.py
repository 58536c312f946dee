"""
API middleware module.
"""
from order_tracker.api.middleware.error_handler import (
    AppException,
    NotFoundException,
    ValidationException,
    app_exception_handler,
    domain_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)

__all__ = [
    "AppException",
    "NotFoundException",
    "ValidationException",
    "app_exception_handler",
    "domain_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "unhandled_exception_handler",
]
