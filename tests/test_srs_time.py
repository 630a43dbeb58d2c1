"""Unit tests for SRS time helpers."""

from datetime import date, datetime, timedelta, timezone

from study_api.srs.time import add_days, ensure_utc, parse_iso_z, utc_date, utc_datetime_to_iso_z


def test_utc_datetime_to_iso_z_second_precision():
    dt = datetime(2025, 12, 13, 0, 0, 0, 999999, tzinfo=timezone.utc)
    assert utc_datetime_to_iso_z(dt) == "2025-12-13T00:00:00Z"


def test_utc_datetime_to_iso_z_converts_offsets():
    dt = datetime(2025, 12, 13, 1, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert utc_datetime_to_iso_z(dt) == "2025-12-12T23:00:00Z"


def test_parse_iso_z_accepts_z_and_fractional_seconds():
    assert parse_iso_z("2025-12-13T00:00:00Z").tzinfo is not None
    assert parse_iso_z("2025-12-13T00:00:00.123456Z").tzinfo is not None


def test_parse_iso_z_normalizes_offsets_to_utc():
    assert parse_iso_z("2025-12-13T01:00:00+01:00") == datetime(2025, 12, 13, 0, 0, tzinfo=timezone.utc)


def test_ensure_utc_treats_naive_as_utc():
    assert ensure_utc(datetime(2025, 1, 1, 12, 0)) == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_utc_date():
    assert utc_date(None) is None
    assert utc_date("2025-12-13T23:59:59Z") == date(2025, 12, 13)
    # 23:30 at -05:00 is already the next day in UTC
    assert utc_date(datetime(2025, 12, 13, 23, 30, tzinfo=timezone(timedelta(hours=-5)))) == date(2025, 12, 14)


def test_add_days_rollover():
    now = datetime(2025, 12, 30, 0, 0, 0, tzinfo=timezone.utc)
    assert add_days(now, 4) == datetime(2026, 1, 3, 0, 0, 0, tzinfo=timezone.utc)


def test_add_zero_days_is_now():
    now = datetime(2025, 12, 30, 6, 0, 0, tzinfo=timezone.utc)
    assert add_days(now, 0) == now
