"""ClassifiedMarket and the two flat output row shapes."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from marketsheet.models.market import Market

STRUCTURED_COLUMNS = [
    "Category",
    "SubCategory1",
    "SubCategory2",
    "Listing",
    "Date",
    "Time",
    "Timezone",
    "Moneyline",
    "Outcome",
    "Price",
]

ORIGINAL_COLUMNS = [
    "Question",
    "Category",
    "Outcomes",
    "Prices",
    "Volume",
    "Liquidity",
    "End Date",
    "Slug",
]


class ClassifiedMarket(BaseModel):
    """A market plus its resolved category labels (never written back onto the market)."""

    market: Market
    category: str = ""
    sub_category_1: str = ""
    sub_category_2: str = ""
    matched_keywords: list[str] = Field(default_factory=list)
    source: Literal["tags", "keywords", "fallback"] = "fallback"


class OutputRow(BaseModel):
    """One outcome-side row of the structured layout."""

    model_config = ConfigDict(frozen=True)

    category: str = ""
    sub_category_1: str = ""
    sub_category_2: str = ""
    listing: str = ""
    date: str = ""
    time: str = ""
    timezone: str = ""
    moneyline: str
    side: Literal["YES", "NO"]
    price: int = Field(..., ge=0, le=100)

    def as_record(self) -> dict[str, Any]:
        values = [
            self.category,
            self.sub_category_1,
            self.sub_category_2,
            self.listing,
            self.date,
            self.time,
            self.timezone,
            self.moneyline,
            self.side,
            self.price,
        ]
        return dict(zip(STRUCTURED_COLUMNS, values))


class MarketSummary(BaseModel):
    """One row per market for the original (descriptive) layout."""

    model_config = ConfigDict(frozen=True)

    question: str
    category: str = ""
    outcomes: str = ""
    prices: str = ""
    volume: float = 0.0
    liquidity: float = 0.0
    end_date: str = ""
    slug: str = ""

    def as_record(self) -> dict[str, Any]:
        values = [
            self.question,
            self.category,
            self.outcomes,
            self.prices,
            self.volume,
            self.liquidity,
            self.end_date,
            self.slug,
        ]
        return dict(zip(ORIGINAL_COLUMNS, values))
