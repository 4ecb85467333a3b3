from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

from app.application.exceptions import CalendarError, InvalidInstantError, InvalidRangeError
from app.application.ports.calendar import CalendarPort
from app.application.utils.date_parser import end_of_day, format_slot_label
from app.application.utils.slot_generator import SlotGenerator
from app.application.utils.timezone_gateway import TimezoneGateway
from app.domain.entities.availability_query import AvailabilityQuery
from app.domain.entities.busy_interval import BusyInterval
from app.domain.entities.slot import AvailableSlot, Slot


class CheckAvailabilityUseCase:
    def __init__(
        self,
        calendar: CalendarPort,
        timezones: TimezoneGateway,
        slots: SlotGenerator,
        default_range_days: int = 14,
        recheck_slots: bool = True,
        max_workers: int = 8,
    ) -> None:
        self._calendar = calendar
        self._timezones = timezones
        self._slots = slots
        self._default_range_days = default_range_days
        self._recheck_slots = recheck_slots
        self._max_workers = max(1, max_workers)
        self._logger = logging.getLogger(__name__)

    def build_query(
        self,
        timezone: str | None,
        start_date: str | None = None,
        end_date: str | None = None,
        now: datetime | None = None,
    ) -> AvailabilityQuery:
        """
        Resolve raw request values into a query.
        Missing start defaults to now, missing end to now + default_range_days.
        When both are given and fall on the same day, the end is widened to the end of that day.
        """
        tz = self._timezones.require_valid(timezone)
        current = self._timezones.parse(now or datetime.now().astimezone(), tz)

        start = self._timezones.parse(start_date, tz) if start_date else current
        end = self._timezones.parse(end_date, tz) if end_date else current + timedelta(days=self._default_range_days)
        if start_date and end_date and start.date() == end.date():
            end = end_of_day(end)

        if start >= end:
            raise InvalidRangeError(f"Range start {start.isoformat()} is not before end {end.isoformat()}")

        # The last slot may end one slot length past the range end.
        try:
            last_end = Slot(start=end, timezone=tz, duration_minutes=self._slots.duration_minutes).end
        except OverflowError:
            raise InvalidInstantError(end_date or end.isoformat()) from None
        self._timezones.to_ledger(last_end, tz)
        return AvailabilityQuery(timezone=tz, range_start=start, range_end=end)

    def find_available(self, query: AvailabilityQuery) -> list[AvailableSlot]:
        tz = self._timezones.require_valid(query.timezone)

        ledger_start = self._timezones.to_ledger(query.range_start, tz)
        ledger_end = self._timezones.to_ledger(query.range_end, tz)
        busy = self._calendar.query_busy(ledger_start, ledger_end)
        self._logger.info(
            "Fetched %d busy intervals",
            len(busy),
            extra={"timezone": tz, "range_start": ledger_start.isoformat(), "range_end": ledger_end.isoformat()},
        )

        generated = self._slots.generate(query.range_start, query.range_end, tz)
        candidates = [slot for slot in generated if self._is_clear(slot, busy)]
        if self._recheck_slots and candidates:
            # executor.map yields in submission order, so chronological order survives
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(candidates))) as pool:
                confirmed = list(pool.map(self._confirm, candidates))
            candidates = [slot for slot, ok in zip(candidates, confirmed) if ok]

        self._logger.info("Available slots computed", extra={"timezone": tz, "slot_count": len(candidates)})
        return [AvailableSlot(slot=slot, formatted=format_slot_label(slot.start)) for slot in candidates]

    def is_slot_free(self, ledger_start: datetime, ledger_end: datetime) -> bool:
        """
        Fresh single-slot check against the calendar.
        Any calendar failure counts as busy.
        """
        try:
            busy = self._calendar.query_busy(ledger_start, ledger_end)
        except CalendarError as e:
            self._logger.warning(
                "Slot check failed, treating slot as unavailable",
                extra={"range_start": ledger_start.isoformat(), "range_end": ledger_end.isoformat(), "error": str(e)},
            )
            return False

        for interval in busy:
            if interval.overlaps(ledger_start, ledger_end):
                self._logger.info(
                    "Overlap found with busy interval",
                    extra={"range_start": interval.start.isoformat(), "range_end": interval.end.isoformat()},
                )
                return False
        return True

    def _is_clear(self, slot: Slot, busy: list[BusyInterval]) -> bool:
        start = self._timezones.to_ledger(slot.start, slot.timezone)
        end = self._timezones.to_ledger(slot.end, slot.timezone)
        return not any(interval.overlaps(start, end) for interval in busy)

    def _confirm(self, slot: Slot) -> bool:
        return self.is_slot_free(
            self._timezones.to_ledger(slot.start, slot.timezone),
            self._timezones.to_ledger(slot.end, slot.timezone),
        )
