"""Market, Tag - canonical Gamma API entities."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class Tag(BaseModel):
    """Official category label attached to a market (or listed by /tags)."""

    id: str | None = None
    label: str = ""
    slug: str | None = None


class Market(BaseModel):
    """Tradeable market after normalization and validation."""

    market_id: str
    question: str = ""
    description: str = ""
    outcomes: list[str] = Field(default_factory=list)
    outcome_prices: list[float] = Field(default_factory=list)  # probabilities in [0, 1]
    tags: list[Tag] = Field(default_factory=list)
    clob_token_ids: list[str] = Field(default_factory=list)
    end_date: datetime | None = None
    volume: float = 0.0
    liquidity: float = 0.0
    slug: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def tag_labels(self) -> list[str]:
        """Tag labels with blank entries dropped, in API order."""
        return [t.label.strip() for t in self.tags if t.label and t.label.strip()]
