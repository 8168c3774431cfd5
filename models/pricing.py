"""
Batch price lookup schemas.

Field names match the ERP contract: ERPId, companyId, items[].partCode,
items[].quantity in; prices[] out.

Request models never reject a batch over one bad line: unusable values
become None and the resolver skips the line.
"""

from pydantic import Field, field_validator
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from models.base import ErpSchema


class PriceItem(ErpSchema):
    """
    One requested line.

    Both fields are optional here: lines without a part code or with a
    non-positive quantity are skipped by the resolver, not rejected.
    """

    part_code: Optional[str] = Field(None, alias="partCode")
    quantity: Optional[Decimal] = Field(None)

    @field_validator("part_code", mode="before")
    @classmethod
    def part_code_is_string(cls, v: Any) -> Optional[str]:
        """Non-string part codes count as missing."""
        return v if isinstance(v, str) else None

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_is_positive_number(cls, v: Any) -> Optional[Decimal]:
        """Unparseable or non-positive quantities count as missing."""
        if v is None or isinstance(v, bool):
            return None
        try:
            quantity = Decimal(str(v).strip())
        except (InvalidOperation, ValueError):
            return None
        if not quantity.is_finite() or quantity <= 0:
            return None
        return quantity


class BatchPriceRequest(ErpSchema):
    """
    Batch price lookup request.

    A non-array items value is treated as missing, so lookup_batch
    reports it with the other required fields.
    """

    erp_id: Optional[Union[int, str]] = Field(None, alias="ERPId")
    company_id: Optional[Union[int, str]] = Field(
        None,
        alias="companyId",
        description="Customer ID"
    )
    items: Optional[list[PriceItem]] = Field(None)

    @field_validator("erp_id", "company_id", mode="before")
    @classmethod
    def scalar_id(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            return None
        return v

    @field_validator("items", mode="before")
    @classmethod
    def items_array(cls, v: Any) -> Optional[list]:
        """Keep arrays only; non-object lines become empty (skipped) lines."""
        if not isinstance(v, list):
            return None
        return [item if isinstance(item, (dict, PriceItem)) else {} for item in v]


class PriceQuote(ErpSchema):
    """Resolved price for one line."""

    internal_code: str = Field(..., alias="internalCode")
    customer_code: Optional[str] = Field(None, alias="customerCode")
    unit_price: float = Field(..., description="Discounted unit price, 2 decimals")
    total_price: float = Field(..., description="unit_price x quantity")
    description: Optional[str] = None


class PriceNotFound(ErpSchema):
    """Line whose part code matched nothing for this customer."""

    part_code: str = Field(..., alias="partCode")
    price: None = None
    description: None = None
    error: str = "Part not found"


class BatchPriceResponse(ErpSchema):
    """One entry per valid request line, in request order."""

    prices: list[Union[PriceQuote, PriceNotFound]] = Field(default_factory=list)
