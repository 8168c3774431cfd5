"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.prices import router as prices_router
from routes.parts import router as parts_router
from routes.customers import router as customers_router
from routes.stores import router as stores_router
from routes.orders import router as orders_router
from routes.reference import router as reference_router

__all__ = [
    "prices_router",
    "parts_router",
    "customers_router",
    "stores_router",
    "orders_router",
    "reference_router",
]
