"""
Reference data routes (dropdown lists).
"""

from fastapi import APIRouter

from models.part import ReferenceItem
from services.part_service import get_part_service
from routes.errors import handle_error

router = APIRouter()


@router.get("/substrates", response_model=list[ReferenceItem])
async def list_substrates():
    """List substrates."""
    try:
        return get_part_service().list_substrates()
    except Exception as e:
        return handle_error(e)


@router.get("/finishes", response_model=list[ReferenceItem])
async def list_finishes():
    """List finishes."""
    try:
        return get_part_service().list_finishes()
    except Exception as e:
        return handle_error(e)
