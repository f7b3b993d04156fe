"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class GatewayError(AppError):
    """
    Raised when the backend cannot satisfy a request.

    Covers both transport failures (network unreachable, non-2xx) and
    application failures (a well-formed body with ``success: false``).
    Callers treat the two identically.
    """

    def __init__(
        self,
        message: str,
        code: str = "TRANSPORT_ERROR",
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, code=code)

    @classmethod
    def application(cls, message: Optional[str]) -> "GatewayError":
        """Build an error for a ``success: false`` envelope."""
        return cls(message or "Request was not successful", code="APPLICATION_ERROR")


class StorageError(AppError):
    """Raised when the on-device key/value store fails."""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


class AuthRequiredError(AppError):
    """Raised when an operation needs a signed-in user and none is present."""

    def __init__(self, message: str = "Please log in to add items to your cart."):
        super().__init__(message, code="AUTH_REQUIRED")
