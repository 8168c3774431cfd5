"""
Store schemas.

The ERP posts the full store form; only the columns the stores table
holds are persisted (see StoreService.create_store).
"""

from pydantic import Field
from typing import Optional, Union

from models.base import BaseSchema, ErpSchema, TimestampMixin


class StoreCreate(ErpSchema):
    """Store form as sent by the ERP. Required: customerId, storeNumber."""

    customer_id: Optional[int] = Field(None, alias="customerId")
    store_number: Optional[Union[int, str]] = Field(None, alias="storeNumber")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    company_name: Optional[str] = Field(None, alias="companyName")
    address_line1: Optional[str] = Field(None, alias="addressLine1")
    address_line2: Optional[str] = Field(None, alias="addressLine2")
    country: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    lookup_hint: Optional[str] = Field(None, alias="lookupHint")


class StoreCreatedResponse(ErpSchema):
    message: str
    store_id: int
    customer_id: int = Field(..., alias="customerId")
    store_number: Union[int, str] = Field(..., alias="storeNumber")


class StoreResponse(BaseSchema, TimestampMixin):
    id: int
    customer_id: int
    store_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
