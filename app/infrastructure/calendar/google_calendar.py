from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from urllib.parse import quote
from zoneinfo import ZoneInfo

import httpx

from app.application.exceptions import (
    CalendarAuthError,
    CalendarError,
    CalendarNotFoundError,
    CalendarUpstreamError,
)
from app.application.ports.calendar import CalendarPort
from app.application.utils.date_parser import parse_iso_datetime
from app.core.config import settings
from app.domain.entities.busy_interval import BusyInterval


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    code = response.status_code
    message = f"Google Calendar returned {code}: {response.text[:200]}"
    if code in (401, 403):
        raise CalendarAuthError(message, status_code=code)
    if code == 404:
        raise CalendarNotFoundError(message, status_code=code)
    raise CalendarUpstreamError(message, status_code=code)


class GoogleCalendar(CalendarPort):
    def __init__(
        self,
        access_token: str | None = None,
        calendar_id: str | None = None,
        base_url: str | None = None,
        ledger_timezone: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._access_token = access_token or settings.GOOGLE_ACCESS_TOKEN
        self._calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
        self._base_url = (base_url or settings.GOOGLE_CALENDAR_BASE_URL).rstrip("/")
        self._ledger_timezone = ledger_timezone or settings.LEDGER_TIMEZONE
        self._client = client or httpx.Client(timeout=timeout or settings.CALENDAR_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._access_token:
            raise ValueError("GOOGLE_ACCESS_TOKEN is required for Google Calendar")
        if not self._calendar_id:
            raise ValueError("GOOGLE_CALENDAR_ID is required for Google Calendar")

    def query_busy(self, start: datetime, end: datetime) -> list[BusyInterval]:
        payload = {
            "timeMin": start.isoformat(),
            "timeMax": end.isoformat(),
            "timeZone": self._ledger_timezone,
            "items": [{"id": self._calendar_id}],
        }
        data = self._request("POST", "/freeBusy", json=payload)

        calendars = data.get("calendars")
        calendar = calendars.get(self._calendar_id) if isinstance(calendars, dict) else None
        if not isinstance(calendar, dict):
            raise CalendarUpstreamError("Calendar missing from freeBusy response")
        errors = calendar.get("errors") or []
        if errors:
            not_found = isinstance(errors, list) and any(
                isinstance(err, dict) and err.get("reason") == "notFound" for err in errors
            )
            if not_found:
                raise CalendarNotFoundError(f"Calendar {self._calendar_id} not found", status_code=404)
            raise CalendarUpstreamError(f"freeBusy errors: {errors}")

        busy = calendar.get("busy") or []
        if not isinstance(busy, list):
            raise CalendarUpstreamError(f"Malformed busy list: {busy!r}")

        zone = ZoneInfo(self._ledger_timezone)
        intervals: list[BusyInterval] = []
        for item in busy:
            if not isinstance(item, dict):
                raise CalendarUpstreamError(f"Malformed busy interval: {item!r}")
            busy_start = parse_iso_datetime(str(item.get("start", "")))
            busy_end = parse_iso_datetime(str(item.get("end", "")))
            if busy_start is None or busy_end is None or busy_start.tzinfo is None or busy_end.tzinfo is None:
                raise CalendarUpstreamError(f"Malformed busy interval: {item}")
            try:
                intervals.append(BusyInterval(start=busy_start.astimezone(zone), end=busy_end.astimezone(zone)))
            except OverflowError as e:
                raise CalendarUpstreamError(f"Malformed busy interval: {item}") from e

        self._logger.debug(
            "Freebusy query returned %d busy intervals",
            len(intervals),
            extra={"range_start": start.isoformat(), "range_end": end.isoformat()},
        )
        return intervals

    def create_event(
        self,
        start: datetime,
        end: datetime,
        summary: str,
        description: str | None = None,
        timezone: str | None = None,
    ) -> str:
        tz = timezone or self._ledger_timezone
        payload = {
            "summary": summary,
            "description": description or "",
            "start": {"dateTime": start.isoformat(), "timeZone": tz},
            "end": {"dateTime": end.isoformat(), "timeZone": tz},
        }
        data = self._request("POST", f"/calendars/{quote(self._calendar_id, safe='')}/events", json=payload)

        event_id = data.get("id")
        if not event_id:
            raise CalendarUpstreamError("No event ID returned from Google Calendar API")

        self._logger.info("Calendar event created", extra={"event_id": event_id})
        return str(event_id)

    def verify_connection(self) -> bool:
        try:
            self._request("GET", f"/calendars/{quote(self._calendar_id, safe='')}")
            return True
        except CalendarError as e:
            self._logger.error("Failed to connect to Google Calendar API", extra={"error": str(e)})
            return False

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._access_token}"}
        try:
            response = self._client.request(method, f"{self._base_url}{path}", json=json, headers=headers)
        except httpx.HTTPError as e:
            raise CalendarUpstreamError(f"Google Calendar request failed: {e}") from e

        _raise_for_status(response)
        try:
            data = response.json()
        except ValueError as e:
            raise CalendarUpstreamError("Google Calendar returned invalid JSON") from e
        if not isinstance(data, dict):
            raise CalendarUpstreamError("Google Calendar returned unexpected payload")
        return data
