"""Category / SubCategory assignment.

Precedence, first hit wins:
1. tag labels (official taxonomy), cut into category / sub 1 / sub 2;
2. keyword match against the question, only when a target category is given;
3. the generic FALLBACK_CATEGORY.
"""

from __future__ import annotations

import structlog

from marketsheet.models import ClassifiedMarket, Market
from marketsheet.pipeline.keywords import CategoryKeywords, KeywordTable

log = structlog.get_logger(__name__)

FALLBACK_CATEGORY = "Markets"

# (needle, subCategory1, subCategory2), checked in order; only applied to keyword-path Sports matches
SPORTS_SUBCATEGORY_HINTS: list[tuple[str, str, str]] = [
    ("copa libertadores", "Soccer", "Copa Libertadores"),
    ("soccer", "Soccer", ""),
]


def match_keywords(question: str, entry: CategoryKeywords) -> list[str]:
    """Return inclusion keywords hit by question; empty if any exclusion keyword is present."""
    text = question.lower()
    for word in entry.get("exclude", []):
        if word.lower() in text:
            return []
    return [word for word in entry.get("keywords", []) if word.lower() in text]


def find_category(keyword_table: KeywordTable, name: str) -> tuple[str, CategoryKeywords] | None:
    """Case-insensitive lookup returning the table's own spelling of the category."""
    wanted = name.strip().lower()
    for key, entry in keyword_table.items():
        if key.lower() == wanted:
            return key, entry
    return None


def _subcategories(category: str, question: str) -> tuple[str, str]:
    if category.lower() != "sports":
        return "", ""
    text = question.lower()
    for needle, sub1, sub2 in SPORTS_SUBCATEGORY_HINTS:
        if needle in text:
            return sub1, sub2
    return "", ""


def classify(
    market: Market,
    category: str | None = None,
    keyword_table: KeywordTable | None = None,
) -> ClassifiedMarket:
    """Classify market. category selects the keyword-fallback entry (category-driven fetch path)."""
    labels = market.tag_labels
    if labels:
        padded = labels[:3] + [""] * (3 - len(labels[:3]))
        return ClassifiedMarket(
            market=market,
            category=padded[0],
            sub_category_1=padded[1],
            sub_category_2=padded[2],
            source="tags",
        )
    found = find_category(keyword_table, category) if category and keyword_table else None
    if found is not None:
        category, entry = found
        hits = match_keywords(market.question, entry)
        if hits:
            log.debug("keyword_match", market_id=market.market_id, category=category, keywords=hits)
            sub1, sub2 = _subcategories(category, market.question)
            return ClassifiedMarket(
                market=market,
                category=category,
                sub_category_1=sub1,
                sub_category_2=sub2,
                matched_keywords=hits,
                source="keywords",
            )
    return ClassifiedMarket(market=market, category=FALLBACK_CATEGORY, source="fallback")


def in_category(market: Market, category: str, keyword_table: KeywordTable) -> bool:
    """Client-side category filter used when the category could not be resolved to a tag id."""
    wanted = category.strip().lower()
    if any(label.lower() == wanted for label in market.tag_labels):
        return True
    found = find_category(keyword_table, category)
    if found is None:
        return False
    return bool(match_keywords(market.question, found[1]))
