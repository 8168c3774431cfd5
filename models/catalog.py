"""
Catalog records returned by the catalog store.

These are the rows the pricing and part search services reason about:
a part as seen through one customer's mapping.
"""

from pydantic import Field
from decimal import Decimal
from typing import Optional

from models.base import BaseSchema


class CatalogMatch(BaseSchema):
    """
    A part joined to one of the customer's mappings.

    price_override is None when the mapping has no override or when the
    row was fetched through a lookup that does not read overrides.
    """

    internal_code: str = Field(..., description="Catalog internal code")
    customer_code: Optional[str] = Field(None, description="Customer-specific code")
    description: Optional[str] = Field(None, description="Part description")
    base_price: Optional[Decimal] = Field(None, description="Catalog base price")
    price_override: Optional[Decimal] = Field(None, description="Customer price override")

    @property
    def effective_price(self) -> Optional[Decimal]:
        """Customer price: the override when set, else the base price."""
        if self.price_override is not None:
            return self.price_override
        return self.base_price
