"""
Store API routes.
"""

from fastapi import APIRouter
import structlog

from models.store import StoreCreate, StoreCreatedResponse
from services.store_service import get_store_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("", response_model=StoreCreatedResponse, status_code=201)
async def create_store(data: StoreCreate):
    """
    Create a store for a customer.

    Raises:
        400: customerId or storeNumber missing
    """
    try:
        service = get_store_service()
        return service.create_store(data)

    except Exception as e:
        return handle_error(e)
