from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from app.domain.entities.slot import Slot


class SlotSequence:
    """Restartable, lazily evaluated slots over [range_start, range_end)."""

    def __init__(self, range_start: datetime, range_end: datetime, timezone: str, duration_minutes: int) -> None:
        zone = ZoneInfo(timezone)
        self._start = range_start.astimezone(zone)
        self._end = range_end.astimezone(zone)
        self._timezone = timezone
        self._duration_minutes = duration_minutes

    def __iter__(self) -> Iterator[Slot]:
        step = timedelta(minutes=self._duration_minutes)
        zone = self._start.tzinfo
        # Step in UTC so DST transitions never shift the 60-minute spacing.
        current = self._start.astimezone(ZoneInfo("UTC"))
        end = self._end.astimezone(ZoneInfo("UTC"))
        while current < end:
            yield Slot(start=current.astimezone(zone), timezone=self._timezone, duration_minutes=self._duration_minutes)
            current += step


class SlotGenerator:
    def __init__(self, duration_minutes: int = 60) -> None:
        self._duration_minutes = duration_minutes

    @property
    def duration_minutes(self) -> int:
        return self._duration_minutes

    def generate(self, range_start: datetime, range_end: datetime, timezone: str) -> SlotSequence:
        return SlotSequence(range_start, range_end, timezone, self._duration_minutes)
