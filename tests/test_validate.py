"""Tradeability filter."""

from datetime import UTC, datetime

from marketsheet.pipeline.validate import validate

NOW = datetime(2025, 10, 1, 0, 0, tzinfo=UTC)


def test_flags_exclude_only_when_explicit():
    ok = {"id": "ok"}
    records = [
        ok,
        {"id": "inactive", "active": False},
        {"id": "closed", "closed": True},
        {"id": "archived", "archived": True},
        {"id": "not_accepting", "acceptingOrders": False},
        {"id": "all_pass", "active": True, "closed": False, "archived": False, "acceptingOrders": True},
    ]
    kept = validate(records, now=NOW)
    assert [r["id"] for r in kept] == ["ok", "all_pass"]
    assert kept[0] is ok


def test_end_date_boundary():
    records = [
        {"id": "at_now", "endDate": "2025-10-01T00:00:00Z"},
        {"id": "1ms_before", "endDate": "2025-09-30T23:59:59.999Z"},
        {"id": "future", "endDate": "2025-10-29T20:30:00-04:00"},
    ]
    assert [r["id"] for r in validate(records, now=NOW)] == ["at_now", "future"]


def test_alternate_end_date_field():
    records = [
        {"id": "iso_past", "endDateIso": "2025-09-01"},
        {"id": "iso_future", "endDateIso": "2025-12-01"},
        {"id": "blank_then_iso", "endDate": "", "endDateIso": "2025-09-01"},
    ]
    assert [r["id"] for r in validate(records, now=NOW)] == ["iso_future"]


def test_missing_or_unparseable_end_date_is_kept():
    records = [{"id": "none"}, {"id": "garbage", "endDate": "soon"}, {"id": "null", "endDate": None}]
    assert len(validate(records, now=NOW)) == 3


def test_bad_records_are_excluded_not_raised():
    records = [None, "oops", {"id": "ok"}]
    kept = validate(records, now=NOW)
    assert kept == [{"id": "ok"}]


def test_output_is_subset_by_identity():
    records = [{"id": str(i), "closed": i % 2 == 0} for i in range(6)]
    kept = validate(records, now=NOW)
    assert all(any(k is r for r in records) for k in kept)
    assert validate(records, now=NOW) == kept


def test_naive_now_is_utc():
    records = [{"id": "a", "endDate": "2025-09-30T23:00:00Z"}]
    assert validate(records, now=datetime(2025, 10, 1)) == []


def test_unparseable_end_date_falls_through_to_iso_field():
    records = [
        {"id": "expired", "endDate": "soon", "endDateIso": "2025-09-01"},
        {"id": "open", "endDate": "soon", "endDateIso": "2025-12-01"},
    ]
    assert [r["id"] for r in validate(records, now=NOW)] == ["open"]
