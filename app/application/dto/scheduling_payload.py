from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from app.application.utils.date_parser import combine_date_and_time
from app.domain.entities.booking import BookingRequest


def _text(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return str(value)


class SchedulingPayloadDTO(BaseModel):
    """
    Raw JSON body posted by the voice agent or a plain HTTP client.
    Variables live either at the top level or under call.retell_llm_dynamic_variables.
    """

    model_config = ConfigDict(extra="allow")

    call: dict[str, Any] | None = None
    args: dict[str, Any] | None = None

    def variables(self) -> dict[str, Any]:
        nested = (self.call or {}).get("retell_llm_dynamic_variables")
        if isinstance(nested, dict) and nested:
            return dict(nested)
        return self.model_dump(exclude={"call", "args"})

    def timezone(self) -> str | None:
        variables = self.variables()
        return _text(variables.get("timeZone") or variables.get("timezone"))


class AvailabilityPayloadDTO(SchedulingPayloadDTO):
    def start_date(self) -> str | None:
        return _text(self.variables().get("startDate"))

    def end_date(self) -> str | None:
        return _text(self.variables().get("endDate"))


class BookingPayloadDTO(SchedulingPayloadDTO):
    def selected_date_time(self) -> str | None:
        variables = self.variables()
        selected = _text(variables.get("selectedDateTime") or variables.get("selected_date_time"))
        if selected:
            return selected

        # Separate date/time fields from a tool call, e.g. {"date": "2024-01-01", "time": "09:00 AM"}
        args = self.args or {}
        date_text, time_text = _text(args.get("date")), _text(args.get("time"))
        if date_text and time_text:
            combined = combine_date_and_time(date_text, time_text)
            if combined is not None:
                return combined.isoformat()
            return f"{date_text} {time_text}"
        return None

    def to_request(self) -> BookingRequest:
        return BookingRequest(timezone=self.timezone(), selected_date_time=self.selected_date_time())
