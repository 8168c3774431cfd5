"""
Part service: catalog parts, reference data and customer mappings.

Plain data access over the parts, substrates, finishes and part_mappings
tables. Pricing and search live in their own services.
"""

from typing import Optional, Union
from datetime import datetime
from decimal import Decimal
import structlog

from config import get_supabase_client
from models.part import (
    CustomerPartResponse,
    PartCreate,
    PartCreatedResponse,
    PartDetailResponse,
    PartMappingCreate,
    PartMappingCreatedResponse,
    PartMappingSummary,
    PartPriceUpdateResponse,
    PartResponse,
    ReferenceItem,
)
from exceptions import (
    CustomerCodeExistsError,
    CustomerPartNotFoundError,
    DatabaseError,
    InvalidPriceError,
    PartInternalCodeExistsError,
    PartNotFoundError,
)
from utils.money_utils import to_decimal

logger = structlog.get_logger(__name__)

PART_COLUMNS = "id, internal_code, description, base_price, created_at, substrates(name), finishes(name)"
CUSTOMER_PART_COLUMNS = (
    "customer_code, price_override, created_at, "
    "parts!inner(id, internal_code, description, base_price, substrates(name), finishes(name))"
)


def _embedded_name(row: dict, relation: str) -> Optional[str]:
    """Name from an embedded to-one relation, e.g. row["substrates"]["name"]."""
    embedded = row.get(relation)
    if not embedded:
        return None
    return embedded.get("name")


def _is_unique_violation(error: Exception) -> bool:
    text = str(error)
    return "23505" in text or "duplicate key" in text.lower()


class PartService:
    """
    Part business logic.

    Handles part CRUD, price updates and customer mappings.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "parts"
        self.mappings_table = "part_mappings"

    # ===================
    # REFERENCE DATA
    # ===================

    def list_substrates(self) -> list[ReferenceItem]:
        """Substrates for dropdowns."""
        return self._list_reference("substrates")

    def list_finishes(self) -> list[ReferenceItem]:
        """Finishes for dropdowns."""
        return self._list_reference("finishes")

    def _list_reference(self, table: str) -> list[ReferenceItem]:
        try:
            result = self.db.table(table).select("id, name").execute()
            return [ReferenceItem(**row) for row in result.data]
        except Exception as e:
            logger.error("list_reference_failed", table=table, error=str(e))
            raise DatabaseError("select", str(e))

    # ===================
    # READ OPERATIONS
    # ===================

    def list_parts(self) -> list[PartResponse]:
        """All parts with substrate and finish names, newest first."""
        logger.info("getting_parts")

        try:
            result = (
                self.db.table(self.table)
                .select(PART_COLUMNS)
                .order("created_at", desc=True)
                .execute()
            )

            parts = [self._row_to_part(row) for row in result.data]

            logger.info("parts_retrieved", count=len(parts))

            return parts

        except Exception as e:
            logger.error("get_parts_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_internal_code(self, internal_code: str) -> Optional[PartResponse]:
        """Get a part by internal code, or None."""
        try:
            result = (
                self.db.table(self.table)
                .select(PART_COLUMNS)
                .eq("internal_code", internal_code)
                .limit(1)
                .execute()
            )

            if not result.data:
                return None

            return self._row_to_part(result.data[0])

        except Exception as e:
            logger.error("get_part_by_internal_code_failed", internal_code=internal_code, error=str(e))
            raise DatabaseError("select", str(e))

    def get_part(self, part_id: int) -> PartDetailResponse:
        """
        Get a part with all its customer mappings.

        Raises:
            PartNotFoundError: If part doesn't exist
        """
        logger.debug("getting_part", part_id=part_id)

        try:
            result = (
                self.db.table(self.table)
                .select(PART_COLUMNS)
                .eq("id", part_id)
                .limit(1)
                .execute()
            )

            if not result.data:
                raise PartNotFoundError(part_id)

            mappings_result = (
                self.db.table(self.mappings_table)
                .select("id, customer_code, price_override, customers(name)")
                .eq("part_id", part_id)
                .execute()
            )

            part = self._row_to_part(result.data[0])
            mappings = [
                PartMappingSummary(
                    id=row["id"],
                    customer_code=row["customer_code"],
                    price_override=to_decimal(row.get("price_override")),
                    customer_name=_embedded_name(row, "customers"),
                )
                for row in mappings_result.data
            ]

            return PartDetailResponse(**part.model_dump(), customer_mappings=mappings)

        except PartNotFoundError:
            raise
        except Exception as e:
            logger.error("get_part_failed", part_id=part_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_customer_parts(
        self,
        customer_id: Union[int, str],
        customer_code: Optional[str] = None
    ) -> Union[CustomerPartResponse, list[CustomerPartResponse]]:
        """
        Parts mapped to a customer, priced at the effective price.

        With customer_code, returns that single part; otherwise every
        mapped part, newest mapping first.

        Raises:
            CustomerPartNotFoundError: If customer_code maps to nothing
        """
        logger.info("getting_customer_parts", customer_id=customer_id, customer_code=customer_code)

        try:
            query = (
                self.db.table(self.mappings_table)
                .select(CUSTOMER_PART_COLUMNS)
                .eq("customer_id", customer_id)
            )

            if customer_code:
                result = query.eq("customer_code", customer_code).limit(1).execute()
                if not result.data:
                    raise CustomerPartNotFoundError(customer_id, customer_code)
                return self._row_to_customer_part(result.data[0])

            result = query.order("created_at", desc=True).execute()
            return [self._row_to_customer_part(row) for row in result.data]

        except CustomerPartNotFoundError:
            raise
        except Exception as e:
            logger.error("get_customer_parts_failed", customer_id=customer_id, error=str(e))
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create_part(self, data: PartCreate) -> PartCreatedResponse:
        """
        Create a new catalog part.

        Raises:
            PartInternalCodeExistsError: If internal code already exists
        """
        logger.info("creating_part", internal_code=data.internal_code)

        if self.get_by_internal_code(data.internal_code):
            raise PartInternalCodeExistsError(data.internal_code)

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "internal_code": data.internal_code,
                    "description": data.description,
                    "base_price": float(data.base_price),
                    "substrate_id": data.substrate_id,
                    "finish_id": data.finish_id,
                })
                .execute()
            )

            part_id = result.data[0]["id"]

            logger.info("part_created", part_id=part_id, internal_code=data.internal_code)

            return PartCreatedResponse(message="Part created successfully", part_id=part_id)

        except Exception as e:
            if _is_unique_violation(e):
                raise PartInternalCodeExistsError(data.internal_code)
            logger.error("create_part_failed", internal_code=data.internal_code, error=str(e))
            raise DatabaseError("insert", str(e))

    def update_price(self, part_id: int, base_price: Optional[Decimal]) -> PartPriceUpdateResponse:
        """
        Set a part's base price.

        Raises:
            InvalidPriceError: If base_price is missing or not positive
            PartNotFoundError: If no part was updated
        """
        if base_price is None or base_price <= 0:
            raise InvalidPriceError(base_price)

        logger.info("updating_part_price", part_id=part_id, base_price=str(base_price))

        try:
            result = (
                self.db.table(self.table)
                .update({
                    "base_price": float(base_price),
                    "updated_at": datetime.utcnow().isoformat(),
                })
                .eq("id", part_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_part_price_failed", part_id=part_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise PartNotFoundError(part_id)

        logger.info("part_price_updated", part_id=part_id)

        return PartPriceUpdateResponse(
            message="Part price updated successfully",
            part_id=part_id,
            new_price=base_price,
        )

    def create_mapping(self, part_id: int, data: PartMappingCreate) -> PartMappingCreatedResponse:
        """
        Map a part to a customer code.

        Raises:
            PartNotFoundError: If part doesn't exist
            CustomerCodeExistsError: If the customer already uses this code
        """
        logger.info(
            "creating_part_mapping",
            part_id=part_id,
            customer_id=data.customer_id,
            customer_code=data.customer_code
        )

        try:
            part = self.db.table(self.table).select("id").eq("id", part_id).limit(1).execute()
            existing = (
                self.db.table(self.mappings_table)
                .select("id")
                .eq("customer_id", data.customer_id)
                .eq("customer_code", data.customer_code)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("create_part_mapping_lookup_failed", part_id=part_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not part.data:
            raise PartNotFoundError(part_id)
        if existing.data:
            raise CustomerCodeExistsError(data.customer_id, data.customer_code)

        try:
            result = (
                self.db.table(self.mappings_table)
                .insert({
                    "part_id": part_id,
                    "customer_id": data.customer_id,
                    "customer_code": data.customer_code,
                    "price_override": (
                        float(data.price_override) if data.price_override is not None else None
                    ),
                })
                .execute()
            )

            mapping_id = result.data[0]["id"]

            logger.info("part_mapping_created", mapping_id=mapping_id, part_id=part_id)

            return PartMappingCreatedResponse(
                message="Part mapping created successfully",
                mapping_id=mapping_id,
            )

        except Exception as e:
            if _is_unique_violation(e):
                raise CustomerCodeExistsError(data.customer_id, data.customer_code)
            logger.error("create_part_mapping_failed", part_id=part_id, error=str(e))
            raise DatabaseError("insert", str(e))

    # ===================
    # HELPERS
    # ===================

    def _row_to_part(self, row: dict) -> PartResponse:
        return PartResponse(
            id=row["id"],
            internal_code=row["internal_code"],
            description=row.get("description"),
            base_price=to_decimal(row["base_price"]),
            substrate=_embedded_name(row, "substrates"),
            finish=_embedded_name(row, "finishes"),
            created_at=row.get("created_at"),
        )

    def _row_to_customer_part(self, row: dict) -> CustomerPartResponse:
        part = row["parts"]
        override = row.get("price_override")
        return CustomerPartResponse(
            id=part["id"],
            internal_code=part["internal_code"],
            customer_code=row["customer_code"],
            description=part.get("description"),
            price=to_decimal(override if override is not None else part.get("base_price")),
            substrate=_embedded_name(part, "substrates"),
            finish=_embedded_name(part, "finishes"),
            created_at=row.get("created_at"),
        )


# Singleton instance
_part_service: Optional[PartService] = None


def get_part_service() -> PartService:
    """Get or create PartService instance."""
    global _part_service
    if _part_service is None:
        _part_service = PartService()
    return _part_service
