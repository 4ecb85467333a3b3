from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class Slot:
    start: datetime  # aware, in the caller's timezone
    timezone: str
    duration_minutes: int = 60

    @property
    def end(self) -> datetime:
        # Elapsed time, not wall-clock time.
        utc_end = self.start.astimezone(ZoneInfo("UTC")) + timedelta(minutes=self.duration_minutes)
        return utc_end.astimezone(self.start.tzinfo)


@dataclass(frozen=True)
class AvailableSlot:
    slot: Slot
    formatted: str

    @property
    def date_time(self) -> str:
        return self.slot.start.isoformat()
