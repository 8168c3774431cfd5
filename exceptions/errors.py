"""
Custom exception classes for the application.

Every error the API reports carries a stable code, an HTTP status and a
details dict. Routes turn them into the standard error body via to_dict().
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "CUSTOMER_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class InvalidRequestError(AppError):
    """Required request fields missing or malformed (400)."""

    def __init__(
        self,
        message: str,
        code: str = "INVALID_REQUEST",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper().replace(' ', '_')}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CUSTOMER ERRORS
# ===================

class CustomerNotFoundError(NotFoundError):
    """Customer not found."""

    def __init__(self, customer_id: str):
        super().__init__(
            resource="Customer",
            identifier=str(customer_id),
            code="CUSTOMER_NOT_FOUND"
        )


# ===================
# PART ERRORS
# ===================

class PartNotFoundError(NotFoundError):
    """Part not found."""

    def __init__(self, part_id: str):
        super().__init__(
            resource="Part",
            identifier=str(part_id),
            code="PART_NOT_FOUND"
        )


class CustomerPartNotFoundError(NotFoundError):
    """No part mapped to this customer code."""

    def __init__(self, customer_id: str, customer_code: str):
        super().__init__(
            resource="Customer part",
            identifier=customer_code,
            code="CUSTOMER_PART_NOT_FOUND"
        )
        self.message = "Part not found for this customer code"
        self.details["customer_id"] = str(customer_id)


class PartInternalCodeExistsError(DuplicateError):
    """Part internal code already exists."""

    def __init__(self, internal_code: str):
        super().__init__(
            resource="Part",
            field="internal_code",
            value=internal_code
        )


class CustomerCodeExistsError(DuplicateError):
    """Customer already maps this code to a part."""

    def __init__(self, customer_id: str, customer_code: str):
        super().__init__(
            resource="Part mapping",
            field="customer_code",
            value=customer_code
        )
        self.message = "Customer code already exists for this customer"
        self.details["customer_id"] = str(customer_id)


class InvalidPriceError(InvalidRequestError):
    """Base price must be positive."""

    def __init__(self, price: Any):
        super().__init__(
            "Valid base_price is required",
            code="INVALID_PRICE",
            details={"provided": str(price)}
        )


# ===================
# ORDER ERRORS
# ===================

class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: str):
        super().__init__(
            resource="Order",
            identifier=str(order_id),
            code="ORDER_NOT_FOUND"
        )
