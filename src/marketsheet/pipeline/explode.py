"""Market -> outcome-side rows, by market shape."""

from __future__ import annotations

import math
from typing import Literal

from marketsheet.models import OutputRow

Shape = Literal["draw", "binary", "multi"]


def price_to_percent(p: float) -> int:
    """Probability -> integer percent, rounding half away from zero."""
    scaled = p * 100
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def detect_shape(outcomes: list[str]) -> Shape:
    lowered = [o.lower() for o in outcomes]
    if any("draw" in o for o in lowered) or len(outcomes) == 3:
        return "draw"
    if len(outcomes) == 2 and any(o in ("yes", "no") for o in lowered):
        return "binary"
    return "multi"


def explode(
    labels: tuple[str, str, str],
    listing: str,
    date: str,
    time: str,
    timezone: str,
    outcomes: list[str],
    prices: list[int],
) -> list[OutputRow]:
    """Emit rows in outcome order. prices are integer percents parallel to outcomes."""
    category, sub1, sub2 = labels
    shape = detect_shape(outcomes)

    def row(moneyline: str, side: Literal["YES", "NO"], price: int) -> OutputRow:
        return OutputRow(
            category=category,
            sub_category_1=sub1,
            sub_category_2=sub2,
            listing=listing,
            date=date,
            time=time,
            timezone=timezone,
            moneyline=moneyline,
            side=side,
            price=price,
        )

    rows: list[OutputRow] = []
    for i, outcome in enumerate(outcomes):
        price = prices[i] if i < len(prices) else 0
        if shape == "binary":
            # Binary markets carry a YES row per outcome and no synthesized NO row
            rows.append(row(outcome, "YES", price))
            continue
        moneyline = "DRAW" if shape == "draw" and "draw" in outcome.lower() else outcome
        rows.append(row(moneyline, "YES", price))
        rows.append(row(moneyline, "NO", 100 - price))
    return rows
