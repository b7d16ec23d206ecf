"""Canonical schema (Pydantic) - Market, Tag, output rows."""

from marketsheet.models.market import Market, Tag
from marketsheet.models.rows import (
    ORIGINAL_COLUMNS,
    STRUCTURED_COLUMNS,
    ClassifiedMarket,
    MarketSummary,
    OutputRow,
)

__all__ = [
    "Market",
    "Tag",
    "ClassifiedMarket",
    "OutputRow",
    "MarketSummary",
    "STRUCTURED_COLUMNS",
    "ORIGINAL_COLUMNS",
]
