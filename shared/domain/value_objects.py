"""
Common Value Objects

Value objects used across multiple domains:
- TimePeriod: A time-of-day interval such as 08:00-10:00
"""

from dataclasses import dataclass
from datetime import datetime, time

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class TimePeriod(ValueObject):
    """
    TimePeriod value object

    Represents a recurring daily interval. The end is exclusive: a period
    08:00-10:00 has elapsed at 10:00 sharp.
    """
    start: time
    end: time

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError("Period end must be after its start")

    @classmethod
    def parse(cls, value: str) -> 'TimePeriod':
        """Parse a period written as ``HH:MM-HH:MM``."""
        try:
            raw_start, raw_end = value.split('-')
            start = datetime.strptime(raw_start.strip(), '%H:%M').time()
            end = datetime.strptime(raw_end.strip(), '%H:%M').time()
        except ValueError:
            raise ValueError(f"Invalid time period: {value!r}")
        return cls(start=start, end=end)

    def has_elapsed(self, moment: time) -> bool:
        return self.end <= moment

    def __str__(self):
        return f"{self.start:%H:%M}-{self.end:%H:%M}"
