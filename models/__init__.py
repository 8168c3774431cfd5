"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    ErpSchema,
    TimestampMixin,
    MessageResponse,
)
from models.customer import CustomerResponse
from models.catalog import CatalogMatch
from models.part import (
    ReferenceItem,
    PartCreate,
    PartCreatedResponse,
    PartResponse,
    PartDetailResponse,
    PartMappingSummary,
    PartPriceUpdate,
    PartPriceUpdateResponse,
    PartMappingCreate,
    PartMappingCreatedResponse,
    CustomerPartResponse,
)
from models.pricing import (
    PriceItem,
    BatchPriceRequest,
    PriceQuote,
    PriceNotFound,
    BatchPriceResponse,
)
from models.search import (
    MatchType,
    PartSearchRequest,
    SearchParams,
    RelatedCode,
    PartSearchResponse,
)
from models.store import StoreCreate, StoreCreatedResponse, StoreResponse
from models.order import OrderSummary, OrderPartLine, OrderDetail

__all__ = [
    # Base
    "BaseSchema",
    "ErpSchema",
    "TimestampMixin",
    "MessageResponse",

    # Customer
    "CustomerResponse",

    # Catalog
    "CatalogMatch",

    # Part
    "ReferenceItem",
    "PartCreate",
    "PartCreatedResponse",
    "PartResponse",
    "PartDetailResponse",
    "PartMappingSummary",
    "PartPriceUpdate",
    "PartPriceUpdateResponse",
    "PartMappingCreate",
    "PartMappingCreatedResponse",
    "CustomerPartResponse",

    # Pricing
    "PriceItem",
    "BatchPriceRequest",
    "PriceQuote",
    "PriceNotFound",
    "BatchPriceResponse",

    # Search
    "MatchType",
    "PartSearchRequest",
    "SearchParams",
    "RelatedCode",
    "PartSearchResponse",

    # Store
    "StoreCreate",
    "StoreCreatedResponse",
    "StoreResponse",

    # Order
    "OrderSummary",
    "OrderPartLine",
    "OrderDetail",
]
