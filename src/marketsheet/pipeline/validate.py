"""Tradeability filter over normalized market records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import structlog

from marketsheet.pipeline.timefmt import parse_instant

log = structlog.get_logger(__name__)

END_DATE_FIELDS = ("endDate", "endDateIso")


def record_end_date(record: dict[str, Any]) -> datetime | None:
    """First end-date field that parses; an unparseable endDate falls through to endDateIso."""
    for field in END_DATE_FIELDS:
        value = record.get(field)
        if isinstance(value, str):
            parsed = parse_instant(value)
            if parsed is not None:
                return parsed
    return None


def is_tradeable(record: dict[str, Any], now: datetime) -> bool:
    """Absent flags pass; only explicit False/True values exclude."""
    if record.get("active") is False:
        return False
    if record.get("closed") is True:
        return False
    if record.get("archived") is True:
        return False
    end = record_end_date(record)
    if end is not None and end < now:
        return False
    if record.get("acceptingOrders") is False:
        return False
    return True


def validate(markets: list[dict[str, Any]], now: datetime | None = None) -> list[dict[str, Any]]:
    """Return the tradeable subset of markets. A record that fails evaluation is excluded."""
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    kept = []
    for record in markets:
        try:
            ok = is_tradeable(record, now)
        except Exception as e:
            mid = record.get("id") if isinstance(record, dict) else None
            log.warning("validate_record_failed", market_id=mid, error=str(e))
            continue
        if ok:
            kept.append(record)
    log.debug("validate", total=len(markets), kept=len(kept))
    return kept
