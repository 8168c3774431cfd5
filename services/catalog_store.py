"""
Catalog store: the read queries behind pricing and part search.

CatalogStore is the interface the pricing and part search services
depend on. SupabaseCatalogStore implements it against the part_mappings
table joined to parts; tests substitute an in-memory store.
"""

from typing import Callable, Optional, Protocol, Sequence, Union
import structlog

from config import get_supabase_client
from models.catalog import CatalogMatch
from models.customer import CustomerResponse
from exceptions import DatabaseError
from utils.money_utils import to_decimal
from utils.text_utils import contains_pattern

logger = structlog.get_logger(__name__)

CustomerId = Union[int, str]

# part_mappings rows with their part embedded; !inner lets filters on
# parts.* drop the mapping row
MAPPING_WITH_PART = "customer_code, price_override, parts!inner(internal_code, description, base_price)"
MAPPING_WITH_PART_NO_OVERRIDE = "customer_code, parts!inner(internal_code, description, base_price)"

# Supabase caps responses at 1000 rows by default
PAGE_SIZE = 1000


class CatalogStore(Protocol):
    """Read-only catalog lookups scoped to one customer."""

    def get_customer(self, customer_id: CustomerId) -> Optional[CustomerResponse]:
        ...

    def get_part_mapping_by_customer_code(
        self,
        customer_id: CustomerId,
        customer_code: str
    ) -> Optional[CatalogMatch]:
        ...

    def get_part_by_internal_code_for_customer(
        self,
        internal_code: str,
        customer_id: CustomerId
    ) -> Optional[CatalogMatch]:
        ...

    def search_mappings_by_description_tokens(
        self,
        customer_id: CustomerId,
        tokens: Sequence[str],
        exclude_code: Optional[str] = None,
        limit: int = 10
    ) -> list[CatalogMatch]:
        ...

    def search_mappings_by_size_substring(
        self,
        customer_id: CustomerId,
        size: str,
        exclude_code: Optional[str] = None,
        limit: int = 5
    ) -> list[CatalogMatch]:
        ...


class SupabaseCatalogStore:
    """
    CatalogStore backed by Supabase.

    Ordering that PostgREST cannot express on the parent row (description
    length, embedded internal code) is applied after the fetch, before
    the limit. Searches page through every matching row so the server's
    max-rows cap never truncates the set being ranked.
    """

    def __init__(self, client=None, page_size: int = PAGE_SIZE):
        self.db = client if client is not None else get_supabase_client()
        self.table = "part_mappings"
        self.page_size = page_size

    # ===================
    # CUSTOMERS
    # ===================

    def list_customers(self) -> list[CustomerResponse]:
        """All customers, by ID."""
        try:
            result = (
                self.db.table("customers")
                .select("id, name, email, phone")
                .order("id")
                .execute()
            )
            return [CustomerResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("list_customers_failed", error=str(e))
            raise DatabaseError("select", str(e))

    # ===================
    # POINT LOOKUPS
    # ===================

    def get_customer(self, customer_id: CustomerId) -> Optional[CustomerResponse]:
        """
        Get a customer by ID.

        Returns:
            CustomerResponse, or None if no such customer (including
            IDs that are not integers)
        """
        if not str(customer_id).strip().isdigit():
            logger.debug("customer_id_not_numeric", customer_id=customer_id)
            return None

        try:
            result = (
                self.db.table("customers")
                .select("id, name, email, phone")
                .eq("id", int(customer_id))
                .limit(1)
                .execute()
            )

            if not result.data:
                return None

            return CustomerResponse(**result.data[0])

        except Exception as e:
            logger.error("get_customer_failed", customer_id=customer_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_part_mapping_by_customer_code(
        self,
        customer_id: CustomerId,
        customer_code: str
    ) -> Optional[CatalogMatch]:
        """
        Find the customer's mapping for one of their own codes.

        Returns:
            CatalogMatch including the mapping's price override, or None
        """
        try:
            result = (
                self.db.table(self.table)
                .select(MAPPING_WITH_PART)
                .eq("customer_id", customer_id)
                .eq("customer_code", customer_code)
                .limit(1)
                .execute()
            )

            if not result.data:
                return None

            return self._row_to_match(result.data[0])

        except Exception as e:
            logger.error(
                "get_mapping_by_customer_code_failed",
                customer_id=customer_id,
                customer_code=customer_code,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_part_by_internal_code_for_customer(
        self,
        internal_code: str,
        customer_id: CustomerId
    ) -> Optional[CatalogMatch]:
        """
        Find a part by internal code, provided the customer maps it.

        The override is not read: callers price this path at base_price.
        """
        try:
            result = (
                self.db.table(self.table)
                .select(MAPPING_WITH_PART_NO_OVERRIDE)
                .eq("parts.internal_code", internal_code)
                .eq("customer_id", customer_id)
                .limit(1)
                .execute()
            )

            if not result.data:
                return None

            return self._row_to_match(result.data[0])

        except Exception as e:
            logger.error(
                "get_part_by_internal_code_failed",
                customer_id=customer_id,
                internal_code=internal_code,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    # ===================
    # PATTERN SEARCH
    # ===================

    def search_mappings_by_description_tokens(
        self,
        customer_id: CustomerId,
        tokens: Sequence[str],
        exclude_code: Optional[str] = None,
        limit: int = 10
    ) -> list[CatalogMatch]:
        """
        Customer's mapped parts whose description contains every token.

        Matching is case-sensitive (LIKE). Results are ordered by
        description length, then internal code.

        Args:
            customer_id: Customer ID
            tokens: Substrings that must all appear in the description
            exclude_code: Customer code to leave out
            limit: Maximum rows returned
        """
        if not tokens:
            return []

        def build_query():
            query = (
                self.db.table(self.table)
                .select(MAPPING_WITH_PART)
                .eq("customer_id", customer_id)
            )
            for token in tokens:
                query = query.like("parts.description", contains_pattern(token))
            if exclude_code:
                query = query.neq("customer_code", exclude_code)
            return query.order("id")

        try:
            rows = self._fetch_all(build_query)
        except Exception as e:
            logger.error(
                "search_by_description_failed",
                customer_id=customer_id,
                tokens=list(tokens),
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        matches = [self._row_to_match(row) for row in rows]
        matches.sort(key=lambda m: (len(m.description or ""), m.internal_code))

        logger.debug(
            "description_tokens_searched",
            customer_id=customer_id,
            tokens=list(tokens),
            found=len(matches)
        )

        return matches[:limit]

    def search_mappings_by_size_substring(
        self,
        customer_id: CustomerId,
        size: str,
        exclude_code: Optional[str] = None,
        limit: int = 5
    ) -> list[CatalogMatch]:
        """
        Customer's mapped parts whose description contains size.

        Ordered by internal code.
        """
        def build_query():
            query = (
                self.db.table(self.table)
                .select(MAPPING_WITH_PART)
                .eq("customer_id", customer_id)
                .like("parts.description", contains_pattern(size))
            )
            if exclude_code:
                query = query.neq("customer_code", exclude_code)
            return query.order("id")

        try:
            rows = self._fetch_all(build_query)
        except Exception as e:
            logger.error(
                "search_by_size_failed",
                customer_id=customer_id,
                size=size,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        matches = [self._row_to_match(row) for row in rows]
        matches.sort(key=lambda m: m.internal_code)

        return matches[:limit]

    # ===================
    # HELPERS
    # ===================

    def _fetch_all(self, build_query: Callable) -> list[dict]:
        """
        Every row of a query, one page at a time.

        build_query returns a fresh query ordered by a unique column;
        each page is ranged on its own builder.
        """
        rows: list[dict] = []
        start = 0

        while True:
            result = build_query().range(start, start + self.page_size - 1).execute()
            rows.extend(result.data)
            if len(result.data) < self.page_size:
                return rows
            start += self.page_size

    def _row_to_match(self, row: dict) -> CatalogMatch:
        """Convert a part_mappings row with embedded part to CatalogMatch."""
        part = row.get("parts") or {}
        return CatalogMatch(
            internal_code=part["internal_code"],
            customer_code=row.get("customer_code"),
            description=part.get("description"),
            base_price=to_decimal(part.get("base_price")),
            price_override=to_decimal(row.get("price_override")),
        )


# Singleton instance
_catalog_store: Optional[SupabaseCatalogStore] = None


def get_catalog_store() -> SupabaseCatalogStore:
    """Get or create SupabaseCatalogStore instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SupabaseCatalogStore()
    return _catalog_store
