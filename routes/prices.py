"""
Price API routes.
"""

from fastapi import APIRouter
import structlog

from models.pricing import BatchPriceRequest, BatchPriceResponse
from services.pricing_service import get_pricing_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/batch", response_model=BatchPriceResponse)
async def get_batch_prices(data: BatchPriceRequest):
    """
    Price several part codes for one customer.

    Each item is matched by the customer's own code first, then by
    internal code. Unknown codes come back inline with an error.

    Raises:
        400: ERPId, companyId or items missing
        404: Customer not found
    """
    try:
        service = get_pricing_service()
        return service.lookup_batch(data)

    except Exception as e:
        return handle_error(e)
