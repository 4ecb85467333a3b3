from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.calendar import CalendarPort
from app.application.use_cases.booking import SaveBookingUseCase
from app.application.use_cases.check_availability import CheckAvailabilityUseCase
from app.application.utils.slot_generator import SlotGenerator
from app.application.utils.timezone_gateway import TimezoneGateway
from app.infrastructure.calendar.google_calendar import GoogleCalendar
from app.infrastructure.calendar.mock_calendar import MockCalendar


@lru_cache
def get_calendar() -> CalendarPort:
    logger = logging.getLogger(__name__)
    logger.info(
        "GOOGLE_ACCESS_TOKEN present=%s GOOGLE_CALENDAR_ID present=%s ENV=%s",
        bool(settings.GOOGLE_ACCESS_TOKEN),
        bool(settings.GOOGLE_CALENDAR_ID),
        settings.ENV,
    )
    if not settings.GOOGLE_ACCESS_TOKEN or settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockCalendar")
        return MockCalendar()
    return GoogleCalendar()


@lru_cache
def get_timezone_gateway() -> TimezoneGateway:
    return TimezoneGateway(ledger_timezone=settings.LEDGER_TIMEZONE)


def get_slot_generator() -> SlotGenerator:
    return SlotGenerator(duration_minutes=settings.SLOT_DURATION_MINUTES)


def get_availability_use_case() -> CheckAvailabilityUseCase:
    return CheckAvailabilityUseCase(
        calendar=get_calendar(),
        timezones=get_timezone_gateway(),
        slots=get_slot_generator(),
        default_range_days=settings.DEFAULT_RANGE_DAYS,
        recheck_slots=settings.SLOT_RECHECK_ENABLED,
        max_workers=settings.SLOT_CHECK_MAX_WORKERS,
    )


def get_booking_use_case() -> SaveBookingUseCase:
    return SaveBookingUseCase(
        calendar=get_calendar(),
        timezones=get_timezone_gateway(),
        availability=get_availability_use_case(),
        duration_minutes=settings.SLOT_DURATION_MINUTES,
    )
