"""
Customer schemas.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema


class CustomerResponse(BaseSchema):
    """Customer as stored. Read-only from this service's perspective."""

    id: int = Field(..., description="Customer ID")
    name: str = Field(..., description="Customer name")
    email: Optional[str] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, description="Contact phone")
