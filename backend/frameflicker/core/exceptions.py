"""
Custom exceptions for the application.
Project: FrameFlicker Studios (Studio Manager)

Domain-specific exceptions, converted to HTTP responses by a single
handler in main.py.

NOTE: BusinessValidationError is not pydantic.ValidationError.
- pydantic.ValidationError: malformed request payloads (handled by FastAPI, mapped to 400)
- BusinessValidationError: business rule violations raised by the services (400)
"""

from typing import Any, Dict, Optional

__all__ = [
    "AppException",
    "NotFoundError",
    "BusinessValidationError",
    "ValidationError",       # alias of BusinessValidationError
    "ConflictError",
    "ConsistencyError",
    "TransientStoreError",
]


class AppException(Exception):
    """
    Base exception for the application.

    Attributes:
        status_code: HTTP status code returned to the client
        error_code: Stable identifier the dashboard can switch on
        detail: Human readable message
        extra: Optional payload for the frontend
    """

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        detail: str,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.detail = detail
        self.error_code = error_code if error_code is not None else self.error_code
        self.extra = extra
        self.status_code = self.__class__.status_code
        super().__init__(detail)


class NotFoundError(AppException):
    """
    Raised when an entity id does not resolve.
    """

    status_code: int = 404
    error_code: str = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        detail: str = "Resource not found",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)


class BusinessValidationError(ValueError, AppException):
    """
    Raised for missing or malformed input that passed schema validation.

    Inherits from ValueError so pydantic validators can raise it too.

    Examples:
        - "Invalid status 'Archived'"
        - "Payment amount must be greater than zero"
        - "client_id is required"
    """

    status_code: int = 400
    error_code: str = "BUSINESS_VALIDATION_ERROR"

    def __init__(
        self,
        detail: str = "Validation failed",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        # Skip ValueError.__init__, AppException sets the message
        AppException.__init__(self, detail, error_code, extra)


# Alias
ValidationError = BusinessValidationError


class ConflictError(AppException):
    """
    Raised when the current state of a resource forbids the operation.
    """

    status_code: int = 409
    error_code: str = "CONFLICT_STATE"

    def __init__(
        self,
        detail: str = "State conflict",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)


class ConsistencyError(AppException):
    """
    Raised when an operation would break the booking ledger.

    Always raised inside the store transaction, so prior state is untouched.

    Examples:
        - reversing a payment against a project it does not belong to
        - a posting that would leave amount_paid + balance_amount != price - deposit_amount
    """

    status_code: int = 409
    error_code: str = "LEDGER_CONSISTENCY_ERROR"

    def __init__(
        self,
        detail: str = "Ledger consistency violated",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)


class TransientStoreError(AppException):
    """
    Raised when the backing store is unreachable or a call timed out.

    The core never retries; callers own the retry policy.
    """

    status_code: int = 500
    error_code: str = "STORE_UNAVAILABLE"

    def __init__(
        self,
        detail: str = "Backing store unavailable",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)
