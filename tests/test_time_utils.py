"""Tests for UTC timestamp helpers."""

from freezegun import freeze_time

from cbai.time_utils import utc_now_iso, utc_now_ms


@freeze_time("2026-01-15 12:34:56.789")
def test_utc_now_iso_uses_milliseconds_and_z_suffix():
    assert utc_now_iso() == "2026-01-15T12:34:56.789Z"


@freeze_time("2026-01-15 12:34:56")
def test_utc_now_iso_pads_whole_seconds():
    assert utc_now_iso() == "2026-01-15T12:34:56.000Z"


@freeze_time("1970-01-01 00:00:01.5")
def test_utc_now_ms_counts_from_epoch():
    assert utc_now_ms() == 1500
