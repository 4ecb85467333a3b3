from __future__ import annotations

import logging
import threading
from datetime import datetime

from app.application.ports.calendar import CalendarPort
from app.domain.entities.busy_interval import BusyInterval


class MockCalendar(CalendarPort):
    def __init__(self, busy: list[BusyInterval] | None = None) -> None:
        self._events: dict[str, BusyInterval] = {}
        self._busy: list[BusyInterval] = list(busy or [])
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def query_busy(self, start: datetime, end: datetime) -> list[BusyInterval]:
        with self._lock:
            intervals = self._busy + list(self._events.values())
        return sorted(
            (interval for interval in intervals if interval.overlaps(start, end)),
            key=lambda interval: interval.start,
        )

    def create_event(
        self,
        start: datetime,
        end: datetime,
        summary: str,
        description: str | None = None,
        timezone: str | None = None,
    ) -> str:
        with self._lock:
            event_id = f"mock_event_{len(self._events) + 1}"
            self._events[event_id] = BusyInterval(start=start, end=end)
        self._logger.info(
            "Mock calendar event created",
            extra={
                "event_id": event_id,
                "range_start": start.isoformat(),
                "range_end": end.isoformat(),
            },
        )
        return event_id

    def verify_connection(self) -> bool:
        return True
