from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AvailabilityQuery:
    timezone: str
    range_start: datetime
    range_end: datetime  # exclusive
