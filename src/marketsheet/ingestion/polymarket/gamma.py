"""Polymarket Gamma API client - market and tag catalog fetches."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
import structlog

from marketsheet.ingestion.polymarket.normalize import coerce_prices, coerce_tags
from marketsheet.models import Market, Tag
from marketsheet.pipeline.validate import record_end_date

log = structlog.get_logger(__name__)

GAMMA_API_BASE = "https://gamma-api.polymarket.com"
MAX_PAGE_LIMIT = 1000


class GammaAPIError(Exception):
    """Network or payload failure talking to the Gamma API."""


def _endpoint(base_url: str | None, path: str) -> str:
    base = (base_url or GAMMA_API_BASE).rstrip("/")
    for suffix in ("/markets", "/tags"):
        if base.endswith(suffix):
            base = base[: -len(suffix)]
    return f"{base}/{path}"


def _get_list(
    url: str,
    params: dict[str, Any],
    timeout: float,
    transport: httpx.BaseTransport | None,
) -> list[Any]:
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            resp = client.get(url, params=params)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as e:
        raise GammaAPIError(f"GET {url} failed: {e}") from e
    except ValueError as e:
        raise GammaAPIError(f"GET {url} returned invalid JSON: {e}") from e
    if isinstance(data, dict):
        data = data.get("data", data.get("markets"))
    if not isinstance(data, list):
        raise GammaAPIError(f"GET {url} returned {type(data).__name__}, expected a list")
    return data


def fetch_raw_markets(
    base_url: str | None = None,
    *,
    tag_id: str | None = None,
    limit: int = 500,
    offset: int = 0,
    active_only: bool = True,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Fetch one capped page of raw market records (fields still possibly JSON strings)."""
    url = _endpoint(base_url, "markets")
    params: dict[str, Any] = {"limit": min(max(int(limit), 1), MAX_PAGE_LIMIT), "offset": offset}
    if active_only:
        params["closed"] = "false"
        params["active"] = "true"
    if tag_id:
        params["tag"] = tag_id
    data = _get_list(url, params, timeout, transport)
    log.info("fetch_markets", url=url, tag=tag_id, limit=params["limit"], count=len(data))
    return data


def fetch_tags(
    base_url: str | None = None,
    *,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> list[Tag]:
    """Fetch the official tag catalog."""
    url = _endpoint(base_url, "tags")
    data = _get_list(url, {}, timeout, transport)
    tags = [Tag(**t) for t in coerce_tags(data)]
    log.info("fetch_tags", url=url, count=len(tags))
    return tags


def parse_market(record: dict[str, Any]) -> Market:
    """Convert a normalized Gamma market record to canonical Market."""
    end_date: datetime | None = record_end_date(record)
    outcomes = record.get("outcomes")
    token_ids = record.get("clobTokenIds")
    return Market(
        market_id=str(record.get("id") or record.get("conditionId") or ""),
        question=str(record.get("question") or record.get("title") or ""),
        description=str(record.get("description") or ""),
        outcomes=[str(o) for o in outcomes] if isinstance(outcomes, list) else [],
        outcome_prices=coerce_prices(record.get("outcomePrices")),
        tags=[Tag(**t) for t in coerce_tags(record.get("tags"))],
        clob_token_ids=[str(t) for t in token_ids] if isinstance(token_ids, list) else [],
        end_date=end_date,
        volume=float(record.get("volumeNum") or record.get("volume") or 0),
        liquidity=float(record.get("liquidityNum") or record.get("liquidity") or 0),
        slug=record.get("slug"),
        extra={"condition_id": record.get("conditionId")},
    )
