from __future__ import annotations

from datetime import datetime

from app.application.utils.slot_generator import SlotGenerator

from tests.conftest import NEW_YORK, ny


def test_right_open_range():
    slots = list(SlotGenerator(60).generate(ny(9), ny(12), "America/New_York"))
    assert [s.start for s in slots] == [ny(9), ny(10), ny(11)]
    assert slots[-1].end == ny(12)


def test_anchored_to_range_start_not_top_of_hour():
    slots = list(SlotGenerator(60).generate(ny(9, 15), ny(11, 30), "America/New_York"))
    assert [s.start for s in slots] == [ny(9, 15), ny(10, 15), ny(11, 15)]


def test_partial_last_slot_still_generated_when_start_inside_range():
    slots = list(SlotGenerator(60).generate(ny(9), ny(10, 1), "America/New_York"))
    assert len(slots) == 2


def test_empty_when_range_is_empty():
    assert list(SlotGenerator(60).generate(ny(9), ny(9), "America/New_York")) == []


def test_sequence_is_restartable():
    sequence = SlotGenerator(60).generate(ny(9), ny(13), "America/New_York")
    assert list(sequence) == list(sequence)


def test_slots_carry_caller_timezone():
    slots = list(SlotGenerator(60).generate(ny(9).astimezone(), ny(11).astimezone(), "America/New_York"))
    assert all(s.timezone == "America/New_York" for s in slots)
    assert slots[0].start.isoformat() == "2024-01-01T09:00:00-05:00"


def test_spacing_is_sixty_minutes_across_dst_change():
    # 2024-03-10 02:00 America/New_York springs forward
    start = datetime(2024, 3, 10, 0, 0, tzinfo=NEW_YORK)
    end = datetime(2024, 3, 10, 5, 0, tzinfo=NEW_YORK)
    slots = list(SlotGenerator(60).generate(start, end, "America/New_York"))
    assert len(slots) == 4
    for earlier, later in zip(slots, slots[1:]):
        assert later.start.timestamp() - earlier.start.timestamp() == 3600
    assert [s.start.hour for s in slots] == [0, 1, 3, 4]
