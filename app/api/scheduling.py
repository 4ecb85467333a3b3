from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.schemas import (
    AvailableSlotSchema,
    BookingSchema,
    CheckAvailabilityResponseSchema,
    SaveBookingResponseSchema,
)
from app.application.dto.scheduling_payload import AvailabilityPayloadDTO, BookingPayloadDTO
from app.application.exceptions import (
    CalendarAuthError,
    CalendarError,
    CalendarNotFoundError,
    InvalidInstantError,
    InvalidRangeError,
    InvalidTimezoneError,
    MissingSelectionError,
    SlotUnavailableError,
)
from app.application.use_cases.booking import SaveBookingUseCase
from app.application.use_cases.check_availability import CheckAvailabilityUseCase
from app.wiring.dependencies import get_availability_use_case, get_booking_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@router.post("/check-availability", response_model=CheckAvailabilityResponseSchema)
def check_availability(
    payload: AvailabilityPayloadDTO | None = None,
    uc: CheckAvailabilityUseCase = Depends(get_availability_use_case),
):
    payload = payload or AvailabilityPayloadDTO()
    logger.debug("Received payload in /check-availability: %s", json.dumps(payload.model_dump(), default=str))
    timezone = payload.timezone()
    try:
        query = uc.build_query(timezone, payload.start_date(), payload.end_date())
        slots = uc.find_available(query)
    except InvalidTimezoneError:
        return _error(400, "Invalid US timezone")
    except (InvalidInstantError, InvalidRangeError) as e:
        return _error(400, str(e))
    except CalendarError as e:
        logger.exception("Error in check-availability", extra={"timezone": timezone, "error": str(e)})
        return _error(500, "Internal server error", str(e))

    logger.info("Found available slots", extra={"timezone": query.timezone, "slot_count": len(slots)})
    return CheckAvailabilityResponseSchema(
        timezone=query.timezone,
        availableSlots=[AvailableSlotSchema(dateTime=s.date_time, formatted=s.formatted) for s in slots],
    )


@router.post("/save-booking", response_model=SaveBookingResponseSchema)
def save_booking(
    payload: BookingPayloadDTO | None = None,
    uc: SaveBookingUseCase = Depends(get_booking_use_case),
):
    payload = payload or BookingPayloadDTO()
    logger.debug("Received payload in /save-booking: %s", json.dumps(payload.model_dump(), default=str))
    request = payload.to_request()
    try:
        record = uc.execute(request)
    except InvalidTimezoneError:
        return _error(400, "Invalid US timezone")
    except MissingSelectionError as e:
        return _error(400, str(e))
    except InvalidInstantError as e:
        return _error(400, str(e))
    except SlotUnavailableError:
        return _error(409, "Selected slot is no longer available")
    except CalendarAuthError as e:
        logger.error("Calendar authentication failed", extra={"error": str(e)})
        return _error(401, "Authentication failed with Google Calendar")
    except CalendarNotFoundError as e:
        logger.error("Calendar not found", extra={"error": str(e)})
        return _error(404, "Calendar not found")
    except CalendarError as e:
        logger.exception("Error in save-booking", extra={"timezone": request.timezone, "error": str(e)})
        return _error(500, "Internal server error", str(e))

    return SaveBookingResponseSchema(
        success=True,
        booking=BookingSchema(
            id=record.external_event_id,
            startTime=record.start.isoformat(),
            endTime=record.end.isoformat(),
            timezone=record.timezone,
        ),
    )
