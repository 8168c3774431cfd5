"""
Customer API routes: the customer and its parts, stores and orders.
"""

from fastapi import APIRouter, Query
from typing import Optional, Union
import structlog

from models.customer import CustomerResponse
from models.part import CustomerPartResponse
from models.store import StoreResponse
from models.order import OrderSummary
from services.catalog_store import get_catalog_store
from services.part_service import get_part_service
from services.store_service import get_store_service
from services.order_service import get_order_service
from exceptions import CustomerNotFoundError
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[CustomerResponse])
async def list_customers():
    """List all customers."""
    try:
        return get_catalog_store().list_customers()

    except Exception as e:
        return handle_error(e)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: int):
    """
    Get a customer.

    Raises:
        404: Customer not found
    """
    try:
        customer = get_catalog_store().get_customer(customer_id)

        if customer is None:
            raise CustomerNotFoundError(customer_id)

        return customer

    except Exception as e:
        return handle_error(e)


@router.get(
    "/{customer_id}/parts",
    response_model=Union[CustomerPartResponse, list[CustomerPartResponse]]
)
async def get_customer_parts(
    customer_id: int,
    customer_code: Optional[str] = Query(
        None,
        alias="customerCode",
        description="Return only the part mapped to this customer code"
    )
):
    """
    Parts mapped to a customer, at the customer's price.

    Raises:
        404: No part for this customer code
    """
    try:
        service = get_part_service()
        return service.get_customer_parts(customer_id, customer_code)

    except Exception as e:
        return handle_error(e)


@router.get("/{customer_id}/stores", response_model=list[StoreResponse])
async def get_customer_stores(customer_id: int):
    """List a customer's stores."""
    try:
        service = get_store_service()
        return service.list_stores(customer_id)

    except Exception as e:
        return handle_error(e)


@router.get("/{customer_id}/orders", response_model=list[OrderSummary])
async def get_customer_orders(customer_id: int):
    """List a customer's orders, newest first."""
    try:
        service = get_order_service()
        return service.list_customer_orders(customer_id)

    except Exception as e:
        return handle_error(e)
