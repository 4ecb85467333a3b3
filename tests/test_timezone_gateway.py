from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import InvalidInstantError, InvalidTimezoneError
from app.application.utils.timezone_gateway import US_TIMEZONES, TimezoneGateway


def test_validate_accepts_only_us_zones(gateway: TimezoneGateway):
    for tz in US_TIMEZONES:
        assert gateway.validate(tz)
    assert not gateway.validate("Europe/London")
    assert not gateway.validate("Asia/Kolkata")
    assert not gateway.validate("")
    assert not gateway.validate(None)


def test_require_valid_raises(gateway: TimezoneGateway):
    with pytest.raises(InvalidTimezoneError):
        gateway.require_valid("Europe/London")
    assert gateway.require_valid("America/Denver") == "America/Denver"


def test_naive_string_is_wall_clock_in_caller_zone(gateway: TimezoneGateway):
    parsed = gateway.parse("2024-01-01T09:00", "America/New_York")
    assert parsed == datetime(2024, 1, 1, 14, 0, tzinfo=timezone.utc)
    assert parsed.utcoffset().total_seconds() == -5 * 3600


def test_offset_string_keeps_absolute_instant(gateway: TimezoneGateway):
    parsed = gateway.parse("2024-01-01T09:00:00Z", "America/Chicago")
    assert parsed == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert parsed.hour == 3


def test_date_only_string_is_midnight(gateway: TimezoneGateway):
    parsed = gateway.parse("2024-03-05", "America/Los_Angeles")
    assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2024, 3, 5, 0)


def test_convert_to_ledger_preserves_instant(gateway: TimezoneGateway):
    ledger = gateway.to_ledger("2024-01-01T10:00", "America/New_York")
    assert ledger.tzinfo == ZoneInfo("Asia/Kolkata")
    assert (ledger.hour, ledger.minute) == (20, 30)
    assert ledger == gateway.parse("2024-01-01T10:00", "America/New_York")


def test_convert_rejects_garbage(gateway: TimezoneGateway):
    with pytest.raises(InvalidInstantError):
        gateway.convert("next tuesday-ish", "America/New_York", "Asia/Kolkata")
    with pytest.raises(InvalidInstantError):
        gateway.convert(None, "America/New_York", "Asia/Kolkata")


def test_out_of_range_instants_are_invalid(gateway: TimezoneGateway):
    with pytest.raises(InvalidInstantError):
        gateway.to_ledger("9999-12-31T23:30", "America/Los_Angeles")
    with pytest.raises(InvalidInstantError):
        gateway.parse("0001-01-01T00:00:00Z", "America/Los_Angeles")
