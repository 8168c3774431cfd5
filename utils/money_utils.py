"""
Money helpers.

Prices come back from Supabase as JSON numbers (floats) or strings;
all arithmetic happens on Decimal.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a database value to Decimal via str (avoids float noise)."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_decimal(value: Decimal, places: int = 2) -> Decimal:
    """Round Decimal to specified decimal places."""
    return value.quantize(Decimal(f"0.{'0' * places}"), rounding=ROUND_HALF_UP)


def money_or_zero(value: Optional[Decimal]) -> float:
    """Price for API output: 2 decimals, 0 when missing."""
    if value is None:
        return 0.0
    return float(round_decimal(value))
