"""
Data models for time entries, calendar records and billing periods.

Frozen dataclasses: records are built once from the store and never mutated
during a report run.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from core.validation import InvalidArgumentError


@dataclass(frozen=True)
class TimeEntry:
    """One recorded unit of work."""

    date: date | None
    hours: float
    description: str
    notes: str | None = None
    id: str = ""


@dataclass(frozen=True)
class CalendarEvent:
    """A calendar record from the household calendar database."""

    title: str
    date: date | None
    notes: str | None = None
    id: str = ""


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month with no reference to a specific day."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidArgumentError(f"Month must be between 1 and 12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise InvalidArgumentError(f"Year out of range: {self.year}")

    @classmethod
    def of(cls, d: date) -> "Month":
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, value: str) -> "Month":
        """Parse YYYY-MM format."""
        try:
            year_str, month_str = value.strip().split("-")
            year, month = int(year_str), int(month_str)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid month '{value}', expected YYYY-MM") from e
        return cls(year, month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        _, last = calendar.monthrange(self.year, self.month)
        return date(self.year, self.month, last)

    @property
    def name(self) -> str:
        return calendar.month_name[self.month]

    @property
    def label(self) -> str:
        """e.g. 'March 2024'."""
        return f"{self.name} {self.year}"

    def previous(self) -> "Month":
        if self.month == 1:
            return Month(self.year - 1, 12)
        return Month(self.year, self.month - 1)

    def contains(self, d: date | None) -> bool:
        return d is not None and d.year == self.year and d.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class BillingLineItem:
    """One invoice row: a week's aggregated hours and amount."""

    week_number: int
    period_label: str
    start_date: date
    end_date: date
    hours: float
    amount: Decimal


@dataclass(frozen=True)
class BillingSummary:
    """Invoice line items plus their total."""

    line_items: list[BillingLineItem] = field(default_factory=list)
    total: Decimal = Decimal("0")
    total_hours: float = 0.0
