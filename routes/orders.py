"""
Order API routes.
"""

from fastapi import APIRouter
import structlog

from models.order import OrderDetail
from services.order_service import get_order_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/{order_id}", response_model=OrderDetail)
async def get_order(order_id: int):
    """
    Get an order with its part lines.

    Raises:
        404: Order not found
    """
    try:
        service = get_order_service()
        return service.get_order(order_id)

    except Exception as e:
        return handle_error(e)
