"""End-to-end transform and build_rows with a mocked Gamma API."""

from datetime import UTC, datetime

import httpx
import pytest

from marketsheet.config.settings import RunConfig
from marketsheet.ingestion.polymarket.gamma import GammaAPIError
from marketsheet.models import MarketSummary, OutputRow
from marketsheet.pipeline.build import (
    MSG_NO_MARKETS,
    MSG_NO_OUTCOMES,
    MSG_NO_ROWS,
    MSG_NONE_VALID,
    build_rows,
    transform_markets,
)
from marketsheet.pipeline.keywords import DEFAULT_KEYWORD_TABLE

NOW = datetime(2025, 10, 1, tzinfo=UTC)


@pytest.fixture
def rac_fla():
    return {
        "id": "540817",
        "question": "RAC vs FLA",
        "outcomes": '["RAC", "DRAW", "FLA"]',
        "outcomePrices": '["0.31", "0.30", "0.45"]',
        "tags": [{"label": "Sports"}, {"label": "Soccer"}, {"label": "Copa Libertadores"}],
        "endDate": "2025-10-29T20:30:00-04:00",
        "active": True,
        "closed": False,
        "acceptingOrders": True,
    }


def _untagged(mid, question, outcomes='["Yes", "No"]', prices='["0.5", "0.5"]'):
    return {"id": mid, "question": question, "outcomes": outcomes, "outcomePrices": prices}


def test_three_way_market_end_to_end(rac_fla):
    result = transform_markets([rac_fla], RunConfig(), DEFAULT_KEYWORD_TABLE, now=NOW)
    assert result.message is None
    assert len(result.rows) == 6
    assert all(isinstance(r, OutputRow) for r in result.rows)
    assert list(result.rows[0].as_record().values()) == [
        "Sports", "Soccer", "Copa Libertadores", "RAC vs FLA",
        "2025-10-29", "20:30", "America/Toronto", "RAC", "YES", 31,
    ]
    assert [(r.moneyline, r.side, r.price) for r in result.rows] == [
        ("RAC", "YES", 31),
        ("RAC", "NO", 69),
        ("DRAW", "YES", 30),
        ("DRAW", "NO", 70),
        ("FLA", "YES", 45),
        ("FLA", "NO", 55),
    ]


def test_twelve_hour_clock(rac_fla):
    result = transform_markets([rac_fla], RunConfig(clock="12h"), DEFAULT_KEYWORD_TABLE, now=NOW)
    assert result.rows[0].time == "8:30 PM"


def test_original_layout_one_row_per_market(rac_fla):
    result = transform_markets(
        [rac_fla, _untagged("2", "Fed cuts rates?")],
        RunConfig(),
        DEFAULT_KEYWORD_TABLE,
        now=NOW,
        layout="original",
    )
    assert len(result.rows) == 2
    first = result.rows[0]
    assert isinstance(first, MarketSummary)
    assert first.category == "Sports"
    assert first.outcomes == "RAC, DRAW, FLA"
    assert first.prices == "31, 30, 45"
    assert first.end_date == "2025-10-29 20:30"
    assert result.rows[1].category == "Markets"


def test_bad_market_is_skipped_batch_continues(rac_fla):
    broken = _untagged("bad", "Broken prices", outcomes='["A", "B"]', prices='["2.0", "0.1"]')
    result = transform_markets([broken, rac_fla], RunConfig(), DEFAULT_KEYWORD_TABLE, now=NOW)
    assert result.skipped == 1
    assert len(result.rows) == 6


def test_empty_results_have_specific_messages(rac_fla):
    assert transform_markets([], RunConfig(), DEFAULT_KEYWORD_TABLE, now=NOW).message == MSG_NO_MARKETS
    expired = dict(rac_fla, endDate="2025-09-01T00:00:00Z")
    result = transform_markets([expired], RunConfig(), DEFAULT_KEYWORD_TABLE, now=NOW)
    assert result.message == MSG_NONE_VALID
    assert result.rows == []
    broken = _untagged("bad", "Broken", outcomes='["A", "B"]', prices='["2.0", "0.1"]')
    assert transform_markets([broken], RunConfig(), DEFAULT_KEYWORD_TABLE, now=NOW).message == MSG_NO_ROWS


def test_client_side_category_filter():
    records = [
        _untagged("1", "Lakers vs Celtics", outcomes='["Lakers", "Celtics"]', prices='["0.55", "0.45"]'),
        _untagged("2", "Will Bitcoin reach $150k?"),
    ]
    config = RunConfig(selected_tag_filter="Sports")
    result = transform_markets(records, config, DEFAULT_KEYWORD_TABLE, now=NOW, client_filter=True)
    assert len(result.rows) == 4
    assert {r.category for r in result.rows} == {"Sports"}
    assert result.rows[0].listing == "Lakers vs Celtics"

    only_crypto = transform_markets(records[1:], config, DEFAULT_KEYWORD_TABLE, now=NOW, client_filter=True)
    assert only_crypto.rows == []
    assert "Sports" in only_crypto.message


def _gamma(markets, tags, seen):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/tags":
            return httpx.Response(200, json=tags)
        return httpx.Response(200, json=markets)

    return httpx.MockTransport(handler)


def test_build_rows_uses_resolved_tag(rac_fla):
    seen = []
    transport = _gamma([rac_fla], [{"id": "100381", "label": "Sports"}], seen)
    config = RunConfig(selected_tag_filter="sports", fetch_limit_max=200)
    result = build_rows(config, DEFAULT_KEYWORD_TABLE, "https://gamma.test", now=NOW, transport=transport)
    assert result.tag_id == "100381"
    assert len(result.rows) == 6
    markets_req = seen[-1]
    assert markets_req.url.params["tag"] == "100381"
    assert markets_req.url.params["limit"] == "200"


def test_build_rows_without_filter_skips_tag_lookup(rac_fla):
    seen = []
    transport = _gamma([rac_fla], [], seen)
    result = build_rows(RunConfig(), DEFAULT_KEYWORD_TABLE, "https://gamma.test", limit=5, now=NOW, transport=transport)
    assert [r.url.path for r in seen] == ["/markets"]
    assert seen[0].url.params["limit"] == "5"
    assert result.tag_id is None


def test_build_rows_fetch_error_propagates():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, json={}))
    with pytest.raises(GammaAPIError):
        build_rows(RunConfig(), DEFAULT_KEYWORD_TABLE, "https://gamma.test", transport=transport)


def test_markets_without_outcomes_get_their_own_message():
    result = transform_markets([{"id": "1", "question": "Q?"}], RunConfig(), DEFAULT_KEYWORD_TABLE, now=NOW)
    assert result.rows == []
    assert result.skipped == 0
    assert result.message == MSG_NO_OUTCOMES


def test_build_rows_falls_back_to_client_filter_when_tag_catalog_fails(rac_fla):
    seen = []
    bitcoin = _untagged("2", "Will Bitcoin reach $150k?")

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/tags":
            return httpx.Response(500, json={"error": "down"})
        return httpx.Response(200, json=[rac_fla, bitcoin])

    config = RunConfig(selected_tag_filter="Sports")
    result = build_rows(
        config, DEFAULT_KEYWORD_TABLE, "https://gamma.test", now=NOW, transport=httpx.MockTransport(handler)
    )
    assert result.tag_id is None
    assert [r.url.path for r in seen] == ["/tags", "/markets"]
    assert "tag" not in seen[-1].url.params
    assert len(result.rows) == 6
    assert {r.listing for r in result.rows} == {"RAC vs FLA"}
