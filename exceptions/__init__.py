"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    InvalidRequestError,
    ConflictError,
    DuplicateError,
    DatabaseError,

    # Customers
    CustomerNotFoundError,

    # Parts
    PartNotFoundError,
    CustomerPartNotFoundError,
    PartInternalCodeExistsError,
    CustomerCodeExistsError,
    InvalidPriceError,

    # Orders
    OrderNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "InvalidRequestError",
    "ConflictError",
    "DuplicateError",
    "DatabaseError",

    # Customers
    "CustomerNotFoundError",

    # Parts
    "PartNotFoundError",
    "CustomerPartNotFoundError",
    "PartInternalCodeExistsError",
    "CustomerCodeExistsError",
    "InvalidPriceError",

    # Orders
    "OrderNotFoundError",
]
