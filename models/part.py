"""
Part, mapping and reference data schemas.
"""

from pydantic import Field, field_validator
from decimal import Decimal
from datetime import datetime
from typing import Optional

from models.base import BaseSchema, MessageResponse


class ReferenceItem(BaseSchema):
    """Substrate or finish entry (for dropdowns)."""

    id: int
    name: str


class PartCreate(BaseSchema):
    """
    Create a new catalog part.

    Required: internal_code, base_price, substrate_id, finish_id
    """

    internal_code: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Catalog internal code (unique)"
    )
    description: Optional[str] = Field(None, description="Part description")
    base_price: Decimal = Field(..., gt=0, description="Catalog base price")
    substrate_id: int = Field(..., description="Substrate ID")
    finish_id: int = Field(..., description="Finish ID")


class PartCreatedResponse(MessageResponse):
    part_id: int


class PartResponse(BaseSchema):
    """Part with substrate and finish names."""

    id: int
    internal_code: str
    description: Optional[str] = None
    base_price: Decimal
    substrate: Optional[str] = None
    finish: Optional[str] = None
    created_at: Optional[datetime] = None


class PartMappingSummary(BaseSchema):
    """One customer's mapping of a part."""

    id: int
    customer_code: str
    price_override: Optional[Decimal] = None
    customer_name: Optional[str] = None


class PartDetailResponse(PartResponse):
    """Part with every customer mapping."""

    customer_mappings: list[PartMappingSummary] = Field(default_factory=list)


class PartPriceUpdate(BaseSchema):
    """New base price for a part."""

    base_price: Optional[Decimal] = Field(None, description="New base price (must be > 0)")


class PartPriceUpdateResponse(MessageResponse):
    part_id: int
    new_price: Decimal


class PartMappingCreate(BaseSchema):
    """
    Map a part to a customer-specific code.

    The (customer_id, customer_code) pair must be unique.
    """

    customer_id: int = Field(..., description="Customer ID")
    customer_code: str = Field(..., min_length=1, description="Customer's code for the part")
    price_override: Optional[Decimal] = Field(None, ge=0, description="Customer-specific price")

    @field_validator("customer_code")
    @classmethod
    def customer_code_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("customer_code cannot be blank")
        return v


class PartMappingCreatedResponse(MessageResponse):
    mapping_id: int


class CustomerPartResponse(BaseSchema):
    """Part as seen by a customer, priced at the effective price."""

    id: int
    internal_code: str
    customer_code: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    substrate: Optional[str] = None
    finish: Optional[str] = None
    created_at: Optional[datetime] = None
