"""
Store service: a customer's stores.
"""

from typing import Optional, Union
import structlog

from config import get_supabase_client
from models.store import StoreCreate, StoreCreatedResponse, StoreResponse
from exceptions import DatabaseError, InvalidRequestError

logger = structlog.get_logger(__name__)


class StoreService:
    """Create and list stores per customer."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "stores"

    def create_store(self, data: StoreCreate) -> StoreCreatedResponse:
        """
        Create a store from the ERP store form.

        The stores table keeps the company name as store_name, the first
        address line as address and the lookup hint as zip_code.

        Raises:
            InvalidRequestError: If customerId or storeNumber is missing
        """
        if not data.customer_id or not data.store_number:
            raise InvalidRequestError(
                "customerId and storeNumber are required",
                details={"customerId": data.customer_id, "storeNumber": data.store_number}
            )

        logger.info("creating_store", customer_id=data.customer_id, store_number=data.store_number)

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "customer_id": data.customer_id,
                    "store_name": data.company_name or "",
                    "address": data.address_line1 or "",
                    "city": data.city or "",
                    "state": data.state or "",
                    "zip_code": data.lookup_hint or "",
                })
                .execute()
            )

            store_id = result.data[0]["id"]

            logger.info("store_created", store_id=store_id, customer_id=data.customer_id)

            return StoreCreatedResponse(
                message="Store created successfully",
                store_id=store_id,
                customer_id=data.customer_id,
                store_number=data.store_number,
            )

        except Exception as e:
            logger.error("create_store_failed", customer_id=data.customer_id, error=str(e))
            raise DatabaseError("insert", str(e))

    def list_stores(self, customer_id: Union[int, str]) -> list[StoreResponse]:
        """All stores for a customer."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("customer_id", customer_id)
                .execute()
            )
            return [StoreResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("list_stores_failed", customer_id=customer_id, error=str(e))
            raise DatabaseError("select", str(e))


# Singleton instance
_store_service: Optional[StoreService] = None


def get_store_service() -> StoreService:
    """Get or create StoreService instance."""
    global _store_service
    if _store_service is None:
        _store_service = StoreService()
    return _store_service
