from __future__ import annotations

from app.domain.entities.busy_interval import BusyInterval
from app.infrastructure.calendar.mock_calendar import MockCalendar

from tests.conftest import ny


def test_created_events_become_busy():
    calendar = MockCalendar()
    assert calendar.query_busy(ny(9), ny(12)) == []

    event_id = calendar.create_event(ny(10), ny(11), summary="Appointment")

    assert event_id == "mock_event_1"
    assert calendar.query_busy(ny(9), ny(12)) == [BusyInterval(start=ny(10), end=ny(11))]
    assert calendar.query_busy(ny(11), ny(12)) == []


def test_seeded_busy_intervals_are_sorted():
    calendar = MockCalendar(busy=[BusyInterval(ny(14), ny(15)), BusyInterval(ny(9), ny(10))])
    assert [b.start for b in calendar.query_busy(ny(0), ny(23))] == [ny(9), ny(14)]
    assert calendar.verify_connection()
