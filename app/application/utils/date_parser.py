from __future__ import annotations

from datetime import datetime

SLOT_LABEL_TIME_FORMAT = "%I:%M %p"
ARGS_DATE_TIME_FORMAT = "%Y-%m-%d %I:%M %p"


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime string. Returns None if not parseable."""
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def combine_date_and_time(date_text: str, time_text: str) -> datetime | None:
    """
    Combine separate 'YYYY-MM-DD' and 'hh:mm AM' values.
    Returns a naive wall-clock datetime, or None if either part does not match.
    """
    try:
        return datetime.strptime(f"{date_text.strip()} {time_text.strip().upper()}", ARGS_DATE_TIME_FORMAT)
    except ValueError:
        return None


def format_slot_label(moment: datetime) -> str:
    """Format like 'January 1, 2024 9:00 AM'."""
    time_str = moment.strftime(SLOT_LABEL_TIME_FORMAT).lstrip("0")
    return f"{moment.strftime('%B')} {moment.day}, {moment.year} {time_str}"


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999000)
