"""Pipeline entry point: fetch -> normalize -> validate -> classify -> explode."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, Field

from marketsheet.config.settings import RunConfig
from marketsheet.ingestion.polymarket.gamma import GammaAPIError, fetch_raw_markets, parse_market
from marketsheet.ingestion.polymarket.normalize import normalize_records
from marketsheet.ingestion.polymarket.tags import resolve_tag_id
from marketsheet.models import ClassifiedMarket, Market, MarketSummary, OutputRow
from marketsheet.pipeline.classify import classify, in_category
from marketsheet.pipeline.explode import explode, price_to_percent
from marketsheet.pipeline.keywords import KeywordTable
from marketsheet.pipeline.listing import extract_listing
from marketsheet.pipeline.timefmt import to_local_civil
from marketsheet.pipeline.validate import validate

log = structlog.get_logger(__name__)

MSG_NO_MARKETS = "No markets returned by the API. Try a different category or raise the fetch limit."
MSG_NONE_VALID = (
    "Markets were returned but none passed validation (all closed, archived, expired or not accepting orders)."
)
MSG_NO_MATCH = "No valid markets matched category '{category}'. Check the name or its keyword list."
MSG_NO_ROWS = "No rows produced. Every market failed processing; see the log for details."
MSG_NO_OUTCOMES = "Markets passed validation but had no outcomes to explode. Try the original layout to inspect them."


class BuildResult(BaseModel):
    """Rows plus counts for one run. message is set for empty results."""

    rows: list[Any] = Field(default_factory=list)
    fetched: int = 0
    valid: int = 0
    skipped: int = 0
    tag_id: str | None = None
    message: str | None = None


def market_rows(
    classified: ClassifiedMarket,
    timezone: str,
    clock: str = "24h",
) -> list[OutputRow]:
    """All outcome-side rows for one classified market."""
    market = classified.market
    date = time = ""
    if market.end_date is not None:
        date, time = to_local_civil(market.end_date, timezone, clock)
    return explode(
        (classified.category, classified.sub_category_1, classified.sub_category_2),
        extract_listing(market.question),
        date,
        time,
        timezone,
        market.outcomes,
        [price_to_percent(p) for p in market.outcome_prices],
    )


def summarize_market(classified: ClassifiedMarket, timezone: str, clock: str = "24h") -> MarketSummary:
    """Original-layout row: one descriptive row per market."""
    market = classified.market
    end = ""
    if market.end_date is not None:
        date, time = to_local_civil(market.end_date, timezone, clock)
        end = f"{date} {time}"
    return MarketSummary(
        question=market.question,
        category=classified.category,
        outcomes=", ".join(market.outcomes),
        prices=", ".join(str(price_to_percent(p)) for p in market.outcome_prices),
        volume=market.volume,
        liquidity=market.liquidity,
        end_date=end,
        slug=market.slug or "",
    )


def prepare_markets(
    raw_records: list[Any],
    config: RunConfig,
    keyword_table: KeywordTable,
    now: datetime | None = None,
    client_filter: bool = False,
) -> tuple[list[ClassifiedMarket], int, int]:
    """Normalize, validate, parse and classify. Returns (classified, valid_count, skipped_count)."""
    records = normalize_records(raw_records)
    valid = validate(records, now=now)
    category = config.selected_tag_filter
    classified: list[ClassifiedMarket] = []
    skipped = 0
    for record in valid:
        try:
            market: Market = parse_market(record)
            if client_filter and category and not in_category(market, category, keyword_table):
                continue
            classified.append(classify(market, category=category, keyword_table=keyword_table))
        except Exception as e:
            skipped += 1
            log.warning("market_parse_failed", market_id=record.get("id"), error=str(e))
    return classified, len(valid), skipped


def transform_markets(
    raw_records: list[Any],
    config: RunConfig,
    keyword_table: KeywordTable,
    now: datetime | None = None,
    client_filter: bool = False,
    layout: str = "structured",
) -> BuildResult:
    """Fetch-free part of the pipeline: raw Gamma records -> flat rows."""
    now = now or datetime.now(UTC)
    result = BuildResult(fetched=len(raw_records))
    if not raw_records:
        result.message = MSG_NO_MARKETS
        return result
    classified, result.valid, result.skipped = prepare_markets(
        raw_records, config, keyword_table, now=now, client_filter=client_filter
    )
    if result.valid == 0:
        result.message = MSG_NONE_VALID
        return result
    if not classified and result.skipped == 0:
        result.message = MSG_NO_MATCH.format(category=config.selected_tag_filter)
        return result
    rows: list[Any] = []
    for cm in classified:
        try:
            if layout == "original":
                rows.append(summarize_market(cm, config.timezone, config.clock))
            else:
                rows.extend(market_rows(cm, config.timezone, config.clock))
        except Exception as e:
            result.skipped += 1
            log.warning("market_rows_failed", market_id=cm.market.market_id, error=str(e))
    result.rows = rows
    if not rows:
        result.message = MSG_NO_ROWS if result.skipped else MSG_NO_OUTCOMES
    log.info(
        "build_rows",
        fetched=result.fetched,
        valid=result.valid,
        markets=len(classified),
        skipped=result.skipped,
        rows=len(rows),
    )
    return result


def build_rows(
    config: RunConfig,
    keyword_table: KeywordTable,
    base_url: str | None = None,
    *,
    limit: int | None = None,
    layout: str = "structured",
    timeout: float = 30.0,
    now: datetime | None = None,
    transport: httpx.BaseTransport | None = None,
) -> BuildResult:
    """Full run. Raises GammaAPIError when the markets fetch fails; every per-market error is absorbed.

    A failed tag catalog fetch leaves the category unresolved, so the client-side filter applies.
    """
    tag_id = None
    if config.selected_tag_filter:
        try:
            tag_id = resolve_tag_id(
                config.selected_tag_filter,
                base_url,
                threshold=config.tag_match_threshold,
                timeout=timeout,
                transport=transport,
            )
        except GammaAPIError as e:
            log.warning(
                "tag_catalog_unavailable",
                category=config.selected_tag_filter,
                error=str(e),
                fallback="client_filter",
            )
    raw = fetch_raw_markets(
        base_url,
        tag_id=tag_id,
        limit=config.clamp_limit(limit),
        timeout=timeout,
        transport=transport,
    )
    result = transform_markets(
        raw,
        config,
        keyword_table,
        now=now,
        client_filter=bool(config.selected_tag_filter) and tag_id is None,
        layout=layout,
    )
    result.tag_id = tag_id
    return result
