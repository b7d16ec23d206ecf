"""Gamma API record normalization: JSON-encoded string fields -> native lists."""

from __future__ import annotations

import json
from typing import Any

import structlog

log = structlog.get_logger(__name__)

# Field -> value substituted when its JSON string fails to decode.
FIELD_DEFAULTS: dict[str, list[Any]] = {
    "outcomes": ["Yes", "No"],
    "outcomePrices": [],
    "tags": [],
    "clobTokenIds": [],
}


def decode_field(value: Any, default: list[Any], field: str = "") -> Any:
    """Return value unchanged unless it is a string; decode strings as JSON, falling back to default."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError) as e:
        log.warning("field_decode_failed", field=field, error=str(e), raw=value[:80])
        return list(default)


def normalize_record(raw: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of raw with outcomes/outcomePrices/tags/clobTokenIds as native values."""
    record = dict(raw)
    for field, default in FIELD_DEFAULTS.items():
        if field in record:
            record[field] = decode_field(record[field], default, field=field)
    return record


def normalize_records(raw_records: list[Any]) -> list[dict[str, Any]]:
    """Normalize a batch. Non-dict entries are dropped with a warning."""
    out = []
    for raw in raw_records:
        if not isinstance(raw, dict):
            log.warning("skip_non_object_record", kind=type(raw).__name__)
            continue
        out.append(normalize_record(raw))
    return out


def _float(s: Any) -> float:
    if s is None:
        return 0.0
    try:
        return float(s)
    except (TypeError, ValueError):
        return 0.0


def coerce_prices(values: Any) -> list[float]:
    """Prices may arrive as strings ("0.31") or numbers; unparseable entries become 0."""
    if not isinstance(values, list):
        return []
    return [_float(v) for v in values]


def coerce_tags(values: Any) -> list[dict[str, Any]]:
    """Tags may be bare strings or {id, label} objects; return {id, label, slug} dicts."""
    if not isinstance(values, list):
        return []
    tags = []
    for t in values:
        if isinstance(t, str):
            tags.append({"id": None, "label": t, "slug": None})
        elif isinstance(t, dict):
            tid = t.get("id")
            tags.append(
                {
                    "id": str(tid) if tid is not None else None,
                    "label": str(t.get("label") or t.get("name") or ""),
                    "slug": t.get("slug"),
                }
            )
    return tags
