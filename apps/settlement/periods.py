"""Calendar-month periods in YYYY-MM form."""

import calendar
import re
from dataclasses import dataclass
from datetime import date

from django.utils import timezone

from .exceptions import InvalidPeriodError

PERIOD_RE = re.compile(r'^(\d{4})-(0[1-9]|1[0-2])$')


@dataclass(frozen=True, order=True)
class Period:
    year: int
    month: int

    @classmethod
    def parse(cls, value: str) -> 'Period':
        match = PERIOD_RE.match(value or '')
        if not match:
            raise InvalidPeriodError(f"Invalid period '{value}'. Use YYYY-MM")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def containing(cls, day: date) -> 'Period':
        return cls(day.year, day.month)

    @classmethod
    def current(cls) -> 'Period':
        return cls.containing(timezone.localdate())

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}"
