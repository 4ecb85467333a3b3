from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from app.application.exceptions import InvalidInstantError, InvalidTimezoneError
from app.application.utils.date_parser import parse_iso_datetime

US_TIMEZONES = (
    "America/New_York",  # Eastern
    "America/Chicago",  # Central
    "America/Denver",  # Mountain
    "America/Los_Angeles",  # Pacific
)


class TimezoneGateway:
    """Validates caller timezones and moves instants between a caller zone and the ledger zone."""

    def __init__(self, ledger_timezone: str, allowed: tuple[str, ...] = US_TIMEZONES) -> None:
        self._ledger_timezone = ledger_timezone
        self._ledger_zone = ZoneInfo(ledger_timezone)
        self._allowed = frozenset(allowed)

    @property
    def ledger_timezone(self) -> str:
        return self._ledger_timezone

    def validate(self, timezone: str | None) -> bool:
        return timezone in self._allowed

    def require_valid(self, timezone: str | None) -> str:
        if not self.validate(timezone):
            raise InvalidTimezoneError(timezone)
        return timezone  # type: ignore[return-value]

    def parse(self, value: str | datetime | None, timezone: str) -> datetime:
        """
        Parse an instant as seen from `timezone`.
        Naive values are wall-clock times in `timezone`; offset-bearing values keep their absolute time.
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str):
            parsed = parse_iso_datetime(value)
            if parsed is None:
                raise InvalidInstantError(value)
        else:
            raise InvalidInstantError(value)

        zone = ZoneInfo(timezone)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=zone)
        try:
            return parsed.astimezone(zone)
        except OverflowError:
            raise InvalidInstantError(value) from None

    def convert(self, instant: str | datetime | None, from_tz: str, to_tz: str) -> datetime:
        try:
            return self.parse(instant, from_tz).astimezone(ZoneInfo(to_tz))
        except OverflowError:
            raise InvalidInstantError(instant) from None

    def to_ledger(self, instant: str | datetime | None, from_tz: str) -> datetime:
        return self.convert(instant, from_tz, self._ledger_timezone)
