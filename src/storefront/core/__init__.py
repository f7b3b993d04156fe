"""Core utilities and shared functionality."""

from storefront.core.clock import Clock, SystemClock, FixedClock
from storefront.core.exceptions import (
    AppError,
    ValidationError,
    GatewayError,
    StorageError,
    AuthRequiredError,
)

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "AppError",
    "ValidationError",
    "GatewayError",
    "StorageError",
    "AuthRequiredError",
]
