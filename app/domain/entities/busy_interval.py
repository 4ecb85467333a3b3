from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


def intervals_overlap(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Half-open overlap test: [start, end) and [other_start, other_end). Touching is not overlapping."""
    return start < other_end and end > other_start


@dataclass(frozen=True)
class BusyInterval:
    start: datetime  # ledger timezone
    end: datetime

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return intervals_overlap(start, end, self.start, self.end)
