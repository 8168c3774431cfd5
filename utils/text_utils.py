"""
Text utilities for part description matching.

Used by part search to turn a free-text description into the tokens
that every candidate description must contain.
"""

from typing import Optional


def significant_tokens(text: Optional[str], min_length: int = 3) -> list[str]:
    """
    Split text on whitespace and keep tokens of at least min_length chars.

    Case is preserved; matching downstream is case-sensitive.

    - "red widget 10mm" → ["red", "widget", "10mm"]
    - "M6 x 20 bolt"    → ["bolt"]
    - "   "             → []

    Args:
        text: Free-text description
        min_length: Shortest token kept

    Returns:
        Tokens in original order (duplicates kept)
    """
    if not text:
        return []

    return [token for token in text.split() if len(token) >= min_length]


def contains_pattern(fragment: str) -> str:
    """SQL LIKE pattern matching fragment anywhere in a column."""
    return f"%{fragment}%"
