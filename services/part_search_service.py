"""
Part search service: reconcile a customer's description against the catalog.

Three strategies run in priority order, each appending candidates:

1. exact_customer_code  the customer's own code, if given (at most one)
2. description_match    every description token (> 2 chars) appears in
                        the part description; shortest descriptions first
3. size_match           part description contains the size hint; only
                        runs while fewer than SEARCH_SIZE_THRESHOLD
                        candidates have been collected

Strategies 2 and 3 skip the customer code already handled by strategy 1.
The merged list is de-duplicated by internal code, first seen wins.
"""

from typing import Optional, Union
import structlog

from config import settings
from models.catalog import CatalogMatch
from models.search import (
    MatchType,
    PartSearchRequest,
    PartSearchResponse,
    RelatedCode,
    SearchParams,
)
from services.catalog_store import CatalogStore, get_catalog_store
from exceptions import CustomerNotFoundError, InvalidRequestError
from utils.money_utils import money_or_zero
from utils.text_utils import significant_tokens

logger = structlog.get_logger(__name__)


class PartSearchService:
    """
    Multi-strategy part search for one customer.

    Read-only; a strategy that finds nothing contributes nothing.
    """

    def __init__(self, store: Optional[CatalogStore] = None):
        self.store = store if store is not None else get_catalog_store()
        self.min_token_length = settings.search_min_token_length
        self.description_limit = settings.search_description_limit
        self.size_limit = settings.search_size_limit
        self.size_threshold = settings.search_size_threshold

    def search(self, request: PartSearchRequest) -> PartSearchResponse:
        """
        Validate a search request, run it and echo its parameters.

        Raises:
            InvalidRequestError: If ERPId, companyId or description is missing
            CustomerNotFoundError: If the customer doesn't exist
        """
        missing = [
            name for name, value in (
                ("ERPId", request.erp_id),
                ("companyId", request.company_id),
                ("description", request.description),
            )
            if not value
        ]
        if missing:
            raise InvalidRequestError(
                "Invalid request. Required: ERPId, companyId, and description",
                details={"missing": missing}
            )

        related = self.search_parts(
            request.company_id,
            request.description,
            customer_part_hint=request.customer_part or None,
            size_hint=request.size or None,
        )

        return PartSearchResponse(
            search_params=SearchParams(
                erp_id=request.erp_id,
                company_id=request.company_id,
                customer_part=request.customer_part or None,
                description=request.description,
                size=request.size or None,
            ),
            total_results=len(related),
            related_codes=related,
        )

    def search_parts(
        self,
        customer_id: Union[int, str],
        description: Optional[str],
        customer_part_hint: Optional[str] = None,
        size_hint: Optional[str] = None
    ) -> list[RelatedCode]:
        """
        Ranked, de-duplicated candidates for a description.

        Args:
            customer_id: Customer ID
            description: Free-text description (required)
            customer_part_hint: Customer's own code for the part
            size_hint: Substring expected in the part description

        Returns:
            Candidates in strategy order

        Raises:
            InvalidRequestError: If description is empty (no query is made)
            CustomerNotFoundError: If the customer doesn't exist
        """
        if not description or not description.strip():
            raise InvalidRequestError(
                "description is required",
                code="DESCRIPTION_REQUIRED"
            )

        logger.info(
            "searching_parts",
            customer_id=customer_id,
            description=description,
            customer_part=customer_part_hint,
            size=size_hint
        )

        customer = self.store.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        candidates: list[tuple[CatalogMatch, MatchType]] = []

        # Strategy 1: the customer's own code
        if customer_part_hint:
            exact = self.store.get_part_mapping_by_customer_code(customer.id, customer_part_hint)
            if exact is not None:
                candidates.append((exact, MatchType.EXACT_CUSTOMER_CODE))

        # Strategy 2: all description tokens
        tokens = significant_tokens(description, self.min_token_length)
        if tokens:
            matches = self.store.search_mappings_by_description_tokens(
                customer.id,
                tokens,
                exclude_code=customer_part_hint,
                limit=self.description_limit
            )
            candidates.extend((m, MatchType.DESCRIPTION_MATCH) for m in matches)

        # Strategy 3: size hint fills gaps
        if size_hint and len(candidates) < self.size_threshold:
            seen = {match.internal_code for match, _ in candidates}
            matches = self.store.search_mappings_by_size_substring(
                customer.id,
                size_hint,
                exclude_code=customer_part_hint,
                limit=self.size_limit
            )
            for match in matches:
                if match.internal_code not in seen:
                    candidates.append((match, MatchType.SIZE_MATCH))
                    seen.add(match.internal_code)

        related = self._dedupe(candidates)

        logger.info(
            "parts_search_complete",
            customer_id=customer.id,
            collected=len(candidates),
            returned=len(related)
        )

        return related

    def _dedupe(self, candidates: list[tuple[CatalogMatch, MatchType]]) -> list[RelatedCode]:
        """Keep the first candidate per internal code."""
        seen: set[str] = set()
        related: list[RelatedCode] = []

        for match, match_type in candidates:
            if match.internal_code in seen:
                continue
            seen.add(match.internal_code)
            related.append(RelatedCode(
                internal_code=match.internal_code,
                customer_code=match.customer_code,
                description=match.description,
                price=money_or_zero(match.base_price),
                customer_price=money_or_zero(match.effective_price),
                match_type=match_type,
            ))

        return related


# Singleton instance
_part_search_service: Optional[PartSearchService] = None


def get_part_search_service() -> PartSearchService:
    """Get or create PartSearchService instance."""
    global _part_search_service
    if _part_search_service is None:
        _part_search_service = PartSearchService()
    return _part_search_service
