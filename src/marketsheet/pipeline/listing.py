"""Short "A vs B" listing labels pulled from free-text questions."""

from __future__ import annotations

import re

MAX_LISTING_LEN = 50

_ABBREV_VS = re.compile(r"\b([A-Z]{3})\s+vs\.?\s+([A-Z]{3})\b", re.IGNORECASE)
_WORD_VS = re.compile(r"(\w+)\s+vs\.?\s+(\w+)", re.IGNORECASE)
_TO_BEAT = re.compile(r"(\w+)\s+to\s+beat\s+(\w+)", re.IGNORECASE)


def extract_listing(question: str | None) -> str:
    """Pattern order matters: the 3-letter abbreviation form must win over the generic word pair."""
    if not question:
        return ""
    m = _ABBREV_VS.search(question)
    if m:
        return f"{m.group(1).upper()} vs {m.group(2).upper()}"
    m = _WORD_VS.search(question)
    if m:
        return f"{m.group(1)} vs {m.group(2)}"
    m = _TO_BEAT.search(question)
    if m:
        return f"{m.group(1)} vs {m.group(2)}"
    return question[:MAX_LISTING_LEN]
