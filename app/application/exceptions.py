class InvalidTimezoneError(ValueError):
    """Raised when a caller timezone is not one of the supported US zones."""

    def __init__(self, timezone: str | None) -> None:
        super().__init__(f"Invalid US timezone: {timezone!r}")
        self.timezone = timezone


class MissingSelectionError(ValueError):
    """Raised when a booking request carries no selected date/time."""
    pass


class InvalidInstantError(ValueError):
    """Raised when a date/time value cannot be parsed."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date/time value: {value!r}")
        self.value = value


class InvalidRangeError(ValueError):
    """Raised when a resolved availability range does not start before it ends."""
    pass


class SlotUnavailableError(RuntimeError):
    """Raised when the recheck before commit finds the slot taken (or cannot tell)."""
    pass


class CalendarError(RuntimeError):
    """Raised when the calendar provider fails (HTTP errors, timeouts, network errors)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CalendarAuthError(CalendarError):
    """Raised when the calendar provider rejects our credentials (401/403)."""
    pass


class CalendarNotFoundError(CalendarError):
    """Raised when the configured calendar does not exist (404)."""
    pass


class CalendarUpstreamError(CalendarError):
    """Raised for any other calendar provider failure."""
    pass
