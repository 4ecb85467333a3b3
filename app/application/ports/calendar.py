from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.busy_interval import BusyInterval


class CalendarPort(ABC):
    @abstractmethod
    def query_busy(self, start: datetime, end: datetime) -> list[BusyInterval]:
        """Return busy intervals overlapping [start, end) on the shared calendar."""
        raise NotImplementedError

    @abstractmethod
    def create_event(
        self,
        start: datetime,
        end: datetime,
        summary: str,
        description: str | None = None,
        timezone: str | None = None,
    ) -> str:
        """Create calendar event. Returns event_id."""
        raise NotImplementedError

    @abstractmethod
    def verify_connection(self) -> bool:
        """Check that the calendar is reachable with the configured credentials. Never raises."""
        raise NotImplementedError
