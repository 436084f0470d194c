"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: a half-open rental period [start, end)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DateRange:
    """
    Date range value object

    Represents a range from start (inclusive) to end (exclusive).
    Used for booking periods and billing. Overlap between periods is
    checked in the database, see ``apps.bookings.services.overlapping_bookings``.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start ({self.start}) must be before end ({self.end})")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def nights(self) -> int:
        """
        Number of billable days in this range

        A partial day is billed as a full one: 24 hours is one night,
        25 hours is two.
        """
        return math.ceil(self.duration / ONE_DAY)

    def price(self, price_per_day: Decimal) -> Decimal:
        return Decimal(self.nights) * Decimal(price_per_day)

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start!r}, {self.end!r})"
