"""Instant -> local civil date/time with a fixed-offset Eastern approximation.

The supported zone uses UTC-4 for UTC calendar months April through November and
UTC-5 otherwise. Real DST transition dates are not consulted; published sheets
depend on exactly this rule. Any other zone id passes the instant through at
offset 0.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Literal, NamedTuple

APPROX_ZONE = "America/Toronto"
DAYLIGHT_MONTHS = range(4, 12)  # April..November inclusive

Clock = Literal["24h", "12h"]


class CivilTime(NamedTuple):
    date: str
    time: str


def parse_instant(value: str | None) -> datetime | None:
    """Parse an ISO timestamp (Z suffix, offset, naive or date-only) and normalize to UTC."""
    if not value:
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def zone_offset_hours(instant: datetime, zone_id: str) -> int:
    if zone_id != APPROX_ZONE:
        return 0
    return -4 if instant.astimezone(UTC).month in DAYLIGHT_MONTHS else -5


def format_time_24(local: datetime) -> str:
    return f"{local.hour:02d}:{local.minute:02d}"


def format_time_12(local: datetime) -> str:
    """H:MM AM/PM; midnight is 12:00 AM, noon 12:00 PM."""
    suffix = "AM" if local.hour < 12 else "PM"
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {suffix}"


def to_local_civil(instant: datetime, zone_id: str = APPROX_ZONE, clock: Clock = "24h") -> CivilTime:
    """Shift instant into zone_id and format as (YYYY-MM-DD, time)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    utc = instant.astimezone(UTC)
    # Wall clock as naive datetime so strftime-style fields read the shifted values
    local = utc.replace(tzinfo=None) + timedelta(hours=zone_offset_hours(utc, zone_id))
    time_str = format_time_12(local) if clock == "12h" else format_time_24(local)
    return CivilTime(date=f"{local.year:04d}-{local.month:02d}-{local.day:02d}", time=time_str)
