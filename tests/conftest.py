from __future__ import annotations

import threading
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from app.application.exceptions import CalendarError
from app.application.ports.calendar import CalendarPort
from app.application.use_cases.booking import SaveBookingUseCase
from app.application.use_cases.check_availability import CheckAvailabilityUseCase
from app.application.utils.slot_generator import SlotGenerator
from app.application.utils.timezone_gateway import TimezoneGateway
from app.domain.entities.busy_interval import BusyInterval
from app.main import app
from app.wiring.dependencies import get_availability_use_case, get_booking_use_case

LEDGER_TZ = "Asia/Kolkata"
NEW_YORK = ZoneInfo("America/New_York")


def ny(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 1, day, hour, minute, tzinfo=NEW_YORK)


class FakeCalendar(CalendarPort):
    """Scriptable calendar: fixed busy intervals, optional failures, records every call."""

    def __init__(self, busy: list[BusyInterval] | None = None) -> None:
        self.busy = list(busy or [])
        self.queries: list[tuple[datetime, datetime]] = []
        self.created: list[tuple[datetime, datetime, str | None]] = []
        self.fail_query_after: int | None = None
        self.query_error: CalendarError | None = None
        self.create_error: CalendarError | None = None
        self.query_barrier: threading.Barrier | None = None
        self._lock = threading.Lock()

    def query_busy(self, start: datetime, end: datetime) -> list[BusyInterval]:
        with self._lock:
            self.queries.append((start, end))
            count = len(self.queries)
        if self.query_error is not None and (self.fail_query_after is None or count > self.fail_query_after):
            raise self.query_error
        if self.query_barrier is not None:
            self.query_barrier.wait(timeout=5)
        return [interval for interval in self.busy if interval.overlaps(start, end)]

    def create_event(self, start, end, summary, description=None, timezone=None) -> str:
        if self.create_error is not None:
            raise self.create_error
        with self._lock:
            self.created.append((start, end, timezone))
            return f"evt_{len(self.created)}"

    def verify_connection(self) -> bool:
        return True


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def gateway() -> TimezoneGateway:
    return TimezoneGateway(ledger_timezone=LEDGER_TZ)


@pytest.fixture
def availability(calendar: FakeCalendar, gateway: TimezoneGateway) -> CheckAvailabilityUseCase:
    return CheckAvailabilityUseCase(calendar=calendar, timezones=gateway, slots=SlotGenerator(60), max_workers=4)


@pytest.fixture
def booking(calendar: FakeCalendar, gateway: TimezoneGateway, availability) -> SaveBookingUseCase:
    return SaveBookingUseCase(calendar=calendar, timezones=gateway, availability=availability)


@pytest.fixture
def client(availability, booking):
    app.dependency_overrides[get_availability_use_case] = lambda: availability
    app.dependency_overrides[get_booking_use_case] = lambda: booking
    yield TestClient(app)
    app.dependency_overrides.clear()
