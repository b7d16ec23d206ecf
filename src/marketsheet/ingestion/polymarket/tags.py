"""Resolve a human category name to an official Gamma tag id."""

from __future__ import annotations

import httpx
import structlog
from rapidfuzz import fuzz, process

from marketsheet.ingestion.polymarket.gamma import fetch_tags
from marketsheet.models import Tag

log = structlog.get_logger(__name__)

DEFAULT_MATCH_THRESHOLD = 80.0


def match_tag(name: str, tags: list[Tag], threshold: float = DEFAULT_MATCH_THRESHOLD) -> Tag | None:
    """Best tag for name: exact label, then exact slug, then fuzzy label match above threshold."""
    wanted = name.strip().lower()
    if not wanted:
        return None
    candidates = [t for t in tags if t.id and t.label.strip()]
    for t in candidates:
        if t.label.strip().lower() == wanted:
            return t
    slug = wanted.replace(" ", "-")
    for t in candidates:
        if t.slug and t.slug.lower() == slug:
            return t
    if not candidates:
        return None
    best = process.extractOne(
        wanted,
        [t.label.lower() for t in candidates],
        scorer=fuzz.WRatio,
        score_cutoff=threshold,
    )
    if best is None:
        return None
    _, score, index = best
    log.debug("tag_fuzzy_match", name=name, label=candidates[index].label, score=round(score, 1))
    return candidates[index]


def resolve_tag_id(
    name: str,
    base_url: str | None = None,
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> str | None:
    """Fetch the tag catalog and return the id matching name, or None."""
    tags = fetch_tags(base_url, timeout=timeout, transport=transport)
    tag = match_tag(name, tags, threshold=threshold)
    if tag is None:
        log.info("tag_not_resolved", name=name, catalog_size=len(tags))
        return None
    log.info("tag_resolved", name=name, tag_id=tag.id, label=tag.label)
    return tag.id
