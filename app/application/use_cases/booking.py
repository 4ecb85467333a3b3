from __future__ import annotations

import logging

from app.application.exceptions import (
    CalendarError,
    InvalidInstantError,
    MissingSelectionError,
    SlotUnavailableError,
)
from app.application.ports.calendar import CalendarPort
from app.application.use_cases.check_availability import CheckAvailabilityUseCase
from app.application.utils.timezone_gateway import TimezoneGateway
from app.domain.entities.booking import BookingRecord, BookingRequest, BookingStatus
from app.domain.entities.slot import Slot


class SaveBookingUseCase:
    """
    Check-then-commit booking of one slot.

    Received -> Validated -> Rechecked -> Committed | Rejected, or Failed on bad input.
    Nothing is held between the recheck and the commit: two attempts for the same slot
    that both pass their recheck before either commits will both be booked.
    """

    def __init__(
        self,
        calendar: CalendarPort,
        timezones: TimezoneGateway,
        availability: CheckAvailabilityUseCase,
        duration_minutes: int = 60,
    ) -> None:
        self._calendar = calendar
        self._timezones = timezones
        self._availability = availability
        self._duration_minutes = duration_minutes
        self._logger = logging.getLogger(__name__)

    def execute(self, request: BookingRequest) -> BookingRecord:
        self._transition(BookingStatus.received, timezone=request.timezone)

        try:
            tz = self._timezones.require_valid(request.timezone)
            if not request.selected_date_time:
                raise MissingSelectionError("No appointment time provided. Please select a valid time slot.")
            start = self._timezones.to_ledger(request.selected_date_time, tz)
            slot = Slot(start=start, timezone=self._timezones.ledger_timezone, duration_minutes=self._duration_minutes)
            try:
                end = slot.end
            except OverflowError:
                raise InvalidInstantError(request.selected_date_time) from None
        except ValueError as e:
            self._transition(BookingStatus.failed, timezone=request.timezone, error=str(e))
            raise
        self._transition(BookingStatus.validated, timezone=tz)

        is_free = self._availability.is_slot_free(start, end)
        self._transition(BookingStatus.rechecked, timezone=tz, range_start=start.isoformat())
        if not is_free:
            self._transition(BookingStatus.rejected, timezone=tz, range_start=start.isoformat())
            raise SlotUnavailableError("Selected slot is no longer available")

        try:
            event_id = self._calendar.create_event(
                start=start,
                end=end,
                summary="Appointment",
                description=f"Booking made from {tz}",
                timezone=self._timezones.ledger_timezone,
            )
        except CalendarError as e:
            self._transition(BookingStatus.failed, timezone=tz, error=str(e))
            raise

        self._transition(BookingStatus.committed, timezone=tz, event_id=event_id)
        return BookingRecord(
            external_event_id=event_id,
            start=start,
            end=end,
            timezone=self._timezones.ledger_timezone,
        )

    def _transition(self, status: BookingStatus, **context: object) -> None:
        self._logger.info("Booking %s", status.value, extra={"status": status.value, **context})
