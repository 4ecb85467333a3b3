from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    received = "received"
    validated = "validated"
    rechecked = "rechecked"
    committed = "committed"
    rejected = "rejected"
    failed = "failed"


@dataclass(frozen=True)
class BookingRequest:
    timezone: str | None
    selected_date_time: str | None


@dataclass(frozen=True)
class BookingRecord:
    external_event_id: str
    start: datetime  # ledger timezone
    end: datetime
    timezone: str  # ledger timezone id
