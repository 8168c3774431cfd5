"""
Part search schemas.
"""

from pydantic import Field
from enum import Enum
from typing import Optional, Union

from models.base import ErpSchema


class MatchType(str, Enum):
    """Which search strategy produced a candidate."""
    EXACT_CUSTOMER_CODE = "exact_customer_code"
    DESCRIPTION_MATCH = "description_match"
    SIZE_MATCH = "size_match"


class PartSearchRequest(ErpSchema):
    """
    Search request.

    Required: ERPId, companyId, description
    Optional: customerPart (customer's own code), size (substring hint)
    """

    erp_id: Optional[Union[int, str]] = Field(None, alias="ERPId")
    company_id: Optional[Union[int, str]] = Field(None, alias="companyId")
    customer_part: Optional[str] = Field(None, alias="customerPart")
    description: Optional[str] = Field(None)
    size: Optional[str] = Field(None)


class SearchParams(ErpSchema):
    """Echo of the search inputs."""

    erp_id: Union[int, str] = Field(..., alias="ERPId")
    company_id: Union[int, str] = Field(..., alias="companyId")
    customer_part: Optional[str] = Field(None, alias="customerPart")
    description: str
    size: Optional[str] = None


class RelatedCode(ErpSchema):
    """One ranked candidate."""

    internal_code: str = Field(..., alias="internalCode")
    customer_code: Optional[str] = Field(None, alias="customerCode")
    description: Optional[str] = None
    price: float = Field(..., description="Catalog base price, 2 decimals")
    customer_price: float = Field(..., alias="customerPrice", description="Effective price, 2 decimals")
    match_type: MatchType = Field(..., alias="matchType")


class PartSearchResponse(ErpSchema):
    search_params: SearchParams = Field(..., alias="searchParams")
    total_results: int = Field(..., alias="totalResults")
    related_codes: list[RelatedCode] = Field(default_factory=list, alias="relatedCodes")
