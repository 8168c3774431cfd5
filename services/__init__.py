"""
Business logic services.

Each service handles one domain area.
"""

from services.catalog_store import (
    CatalogStore,
    SupabaseCatalogStore,
    get_catalog_store,
)
from services.pricing_service import PricingService, get_pricing_service
from services.part_search_service import PartSearchService, get_part_search_service
from services.part_service import PartService, get_part_service
from services.store_service import StoreService, get_store_service
from services.order_service import OrderService, get_order_service

__all__ = [
    "CatalogStore",
    "SupabaseCatalogStore",
    "get_catalog_store",
    "PricingService",
    "get_pricing_service",
    "PartSearchService",
    "get_part_search_service",
    "PartService",
    "get_part_service",
    "StoreService",
    "get_store_service",
    "OrderService",
    "get_order_service",
]
