"""
Pricing service: batch price lookup for the ERP.

Resolves each requested part code to a customer price and applies the
quantity discount:

    tiers      = floor(quantity / tier_size)          (tier_size = 10)
    discount   = tiers × per_tier                      (per_tier = 0.0001)
    unit_price = round(price × (1 − discount), 2)
    total      = unit_price × quantity

The discount is uncapped. total_price is built from the rounded
unit_price and is not rounded again.
"""

from decimal import Decimal
from typing import Optional, Union
import structlog

from config import settings
from models.catalog import CatalogMatch
from models.pricing import (
    BatchPriceRequest,
    BatchPriceResponse,
    PriceItem,
    PriceQuote,
    PriceNotFound,
)
from services.catalog_store import CatalogStore, get_catalog_store
from exceptions import CustomerNotFoundError, InvalidRequestError
from utils.money_utils import round_decimal

logger = structlog.get_logger(__name__)

PriceEntry = Union[PriceQuote, PriceNotFound]


def quantity_discount(
    quantity: Decimal,
    tier_size: int = 10,
    per_tier: Decimal = Decimal("0.0001")
) -> Decimal:
    """
    Discount fraction for a quantity.

    0 below one full tier; otherwise per_tier for every full tier.

    - 9    → 0
    - 25   → 0.0002
    - 1000 → 0.01
    """
    if quantity < tier_size:
        return Decimal("0")
    tiers = int(quantity // tier_size)
    return tiers * per_tier


def discounted_price(
    price: Decimal,
    quantity: Decimal,
    tier_size: int = 10,
    per_tier: Decimal = Decimal("0.0001")
) -> Decimal:
    """Full-precision unit price after the quantity discount."""
    discount = quantity_discount(quantity, tier_size, per_tier)
    if not discount:
        return price
    return price * (1 - discount)


class PricingService:
    """
    Batch price resolution.

    Read-only. One unknown part never fails the batch; it becomes an
    inline "Part not found" entry.
    """

    def __init__(self, store: Optional[CatalogStore] = None):
        self.store = store if store is not None else get_catalog_store()
        self.tier_size = settings.price_discount_tier_size
        self.per_tier = settings.price_discount_per_tier

    def lookup_batch(self, request: BatchPriceRequest) -> BatchPriceResponse:
        """
        Validate a batch request and price it.

        Raises:
            InvalidRequestError: If ERPId, companyId or the items array is missing
            CustomerNotFoundError: If the customer doesn't exist
        """
        missing = [
            name for name, value in (
                ("ERPId", request.erp_id),
                ("companyId", request.company_id),
            )
            if not value
        ]
        if request.items is None:
            missing.append("items")

        if missing:
            raise InvalidRequestError(
                "Invalid request. Required: ERPId, companyId, and items array",
                details={"missing": missing}
            )

        prices = self.resolve_prices(request.company_id, request.items)
        return BatchPriceResponse(prices=prices)

    def resolve_prices(
        self,
        customer_id: Union[int, str],
        items: list[PriceItem]
    ) -> list[PriceEntry]:
        """
        Price every valid line for a customer.

        Lines with an empty part code or a missing/non-positive quantity
        are skipped.

        Args:
            customer_id: Customer ID
            items: Requested lines

        Returns:
            One PriceQuote or PriceNotFound per valid line, in input order

        Raises:
            CustomerNotFoundError: If the customer doesn't exist
        """
        logger.info("resolving_prices", customer_id=customer_id, items=len(items))

        customer = self.store.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        prices: list[PriceEntry] = []
        skipped = 0

        for item in items:
            if not item.part_code or item.quantity is None or item.quantity <= 0:
                skipped += 1
                continue

            prices.append(self._resolve_item(customer.id, item.part_code, item.quantity))

        logger.info(
            "prices_resolved",
            customer_id=customer.id,
            returned=len(prices),
            not_found=sum(1 for p in prices if isinstance(p, PriceNotFound)),
            skipped=skipped
        )

        return prices

    def _resolve_item(
        self,
        customer_id: int,
        part_code: str,
        quantity: Decimal
    ) -> PriceEntry:
        """Customer code first, then internal code, else not found."""
        match = self.store.get_part_mapping_by_customer_code(customer_id, part_code)
        price: Optional[Decimal] = None

        if match is not None:
            price = match.effective_price
        else:
            match = self.store.get_part_by_internal_code_for_customer(part_code, customer_id)
            if match is not None:
                # Overrides are not applied on the internal-code path
                price = match.base_price

        if match is None or price is None:
            logger.debug("part_not_found_for_item", customer_id=customer_id, part_code=part_code)
            return PriceNotFound(part_code=part_code)

        return self._quote(match, price, quantity)

    def _quote(self, match: CatalogMatch, price: Decimal, quantity: Decimal) -> PriceQuote:
        final_price = discounted_price(price, quantity, self.tier_size, self.per_tier)
        unit_price = round_decimal(final_price)

        return PriceQuote(
            internal_code=match.internal_code,
            customer_code=match.customer_code,
            unit_price=float(unit_price),
            total_price=float(unit_price * quantity),
            description=match.description,
        )


# Singleton instance
_pricing_service: Optional[PricingService] = None


def get_pricing_service() -> PricingService:
    """Get or create PricingService instance."""
    global _pricing_service
    if _pricing_service is None:
        _pricing_service = PricingService()
    return _pricing_service
