"""
Part API routes: catalog parts, mappings and part search.
"""

from fastapi import APIRouter
import structlog

from models.part import (
    PartCreate,
    PartCreatedResponse,
    PartDetailResponse,
    PartMappingCreate,
    PartMappingCreatedResponse,
    PartPriceUpdate,
    PartPriceUpdateResponse,
    PartResponse,
)
from models.search import PartSearchRequest, PartSearchResponse
from services.part_service import get_part_service
from services.part_search_service import get_part_search_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# SEARCH
# ===================

@router.post("/search", response_model=PartSearchResponse)
async def search_parts(data: PartSearchRequest):
    """
    Find catalog parts related to a customer's description.

    Candidates come from the customer's own code, description tokens and
    the size hint, in that order, without duplicates.

    Raises:
        400: ERPId, companyId or description missing
        404: Customer not found
    """
    try:
        service = get_part_search_service()
        return service.search(data)

    except Exception as e:
        return handle_error(e)


# ===================
# CRUD
# ===================

@router.post("", response_model=PartCreatedResponse, status_code=201)
async def create_part(data: PartCreate):
    """
    Create a catalog part.

    Raises:
        409: Internal code already exists
        422: Validation error
    """
    try:
        service = get_part_service()
        return service.create_part(data)

    except Exception as e:
        return handle_error(e)


@router.get("", response_model=list[PartResponse])
async def list_parts():
    """List all parts, newest first."""
    try:
        service = get_part_service()
        return service.list_parts()

    except Exception as e:
        return handle_error(e)


@router.get("/{part_id}", response_model=PartDetailResponse)
async def get_part(part_id: int):
    """
    Get a part with its customer mappings.

    Raises:
        404: Part not found
    """
    try:
        service = get_part_service()
        return service.get_part(part_id)

    except Exception as e:
        return handle_error(e)


@router.patch("/{part_id}/price", response_model=PartPriceUpdateResponse)
async def update_part_price(part_id: int, data: PartPriceUpdate):
    """
    Update a part's base price.

    Raises:
        400: base_price missing or not positive
        404: Part not found
    """
    try:
        service = get_part_service()
        return service.update_price(part_id, data.base_price)

    except Exception as e:
        return handle_error(e)


@router.post("/{part_id}/mappings", response_model=PartMappingCreatedResponse, status_code=201)
async def create_part_mapping(part_id: int, data: PartMappingCreate):
    """
    Map a part to a customer's own code.

    Raises:
        404: Part not found
        409: Customer code already exists for this customer
    """
    try:
        service = get_part_service()
        return service.create_mapping(part_id, data)

    except Exception as e:
        return handle_error(e)
