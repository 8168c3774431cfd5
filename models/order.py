"""
Order schemas (read-only views).
"""

from pydantic import Field
from decimal import Decimal
from datetime import datetime
from typing import Optional

from models.base import BaseSchema


class OrderSummary(BaseSchema):
    """Order row in a customer's order list."""

    id: int
    order_number: str
    status_name: Optional[str] = None
    total_amount: Optional[Decimal] = None
    order_date: Optional[datetime] = None
    total_parts: int = 0


class OrderPartLine(BaseSchema):
    id: int
    internal_code: Optional[str] = None
    description: Optional[str] = None
    quantity: Decimal
    unit_price: Optional[Decimal] = None
    part_status: Optional[str] = None
    notes: Optional[str] = None


class OrderDetail(BaseSchema):
    """Order header with customer contact and its lines."""

    id: int
    order_number: str
    order_status: Optional[str] = None
    total_amount: Optional[Decimal] = None
    order_date: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    parts: list[OrderPartLine] = Field(default_factory=list)
