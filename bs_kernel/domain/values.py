"""
Values -- Immutable domain value objects for calendar computations.

Responsibility:
    Provides the value types shared by every layer: calendar dates, tagged
    date strings, the accounting-year / calendar-system / period-type
    enumerations, period references and date differences.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module.  No outward dependencies except
    bs_kernel.exceptions.

Invariants enforced:
    - BS and AD strings are distinct types (``BSDateString`` /
      ``ADDateString``) so that a BS result cannot be passed where an AD
      string is expected without an explicit conversion.
    - Enumerations parse only their declared members; anything else raises
      a DomainError subclass carrying the rejected value.

Failure modes:
    - InvalidConfigValueError from ``AccountingYearType.parse`` and
      ``CalendarSystem.parse``.
    - InvalidPeriodTypeError from ``PeriodType.parse``.
    - InvalidUnitError from ``DateUnit.parse``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NewType

from bs_kernel.exceptions import (
    InvalidConfigValueError,
    InvalidPeriodTypeError,
    InvalidUnitError,
)

BSDateString = NewType("BSDateString", str)
ADDateString = NewType("ADDateString", str)

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"


class AccountingYearType(str, Enum):
    """Which twelve consecutive BS months make up an accounting year.

    CALENDAR starts at Baisakh (month 1); FINANCIAL starts at Shrawan
    (month 4) and ends at Ashadh (month 3) of the following year.
    """

    CALENDAR = "calendar"
    FINANCIAL = "financial"

    @classmethod
    def parse(cls, value: AccountingYearType | str) -> AccountingYearType:
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigValueError(
                "accounting year type", value, tuple(m.value for m in cls)
            ) from None


class CalendarSystem(str, Enum):
    """Calendar a caller thinks in by default."""

    AD = "ad"
    BS = "bs"

    @classmethod
    def parse(cls, value: CalendarSystem | str) -> CalendarSystem:
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigValueError(
                "calendar system", value, tuple(m.value for m in cls)
            ) from None


class PeriodType(str, Enum):
    """Granularity of an accounting period."""

    MONTH = "month"
    QUARTER = "quarter"
    HALF_YEAR = "half-year"
    YEAR = "year"

    @property
    def months(self) -> int:
        """Number of months in one period of this type."""
        return _PERIOD_MONTHS[self]

    @property
    def periods_per_year(self) -> int:
        return 12 // _PERIOD_MONTHS[self]

    @classmethod
    def parse(cls, value: PeriodType | str) -> PeriodType:
        try:
            return cls(value)
        except ValueError:
            raise InvalidPeriodTypeError(str(value)) from None


_PERIOD_MONTHS = {
    PeriodType.MONTH: 1,
    PeriodType.QUARTER: 3,
    PeriodType.HALF_YEAR: 6,
    PeriodType.YEAR: 12,
}


class DateUnit(str, Enum):
    """Unit for date differences."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"

    @classmethod
    def parse(cls, value: DateUnit | str) -> DateUnit:
        try:
            return cls(value)
        except ValueError:
            raise InvalidUnitError(str(value)) from None


@dataclass(frozen=True, slots=True, order=True)
class CalendarDate:
    """
    A (year, month, day) triple in either calendar.

    Contract:
        Carries no calendar tag of its own; validity depends on which
        calendar the caller is in (BS: the month table, AD: the Gregorian
        leap rule).  Validation lives with the engines that know the
        calendar.

    Guarantees:
        - Immutable, hashable and ordered field-wise (year, month, day).
    """

    year: int
    month: int
    day: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, slots=True)
class PeriodRef:
    """
    Reference to one period of an accounting year.

    Contract:
        ``year`` is the accounting year (for FINANCIAL years, the BS year in
        which the fiscal year starts).  ``index`` is 1-based within the year:
        1..12 for months, 1..4 for quarters, 1..2 for halves, 1 for years.
        Created per call, never stored.
    """

    year: int
    index: int
    period_type: PeriodType

    @property
    def quarter(self) -> int | None:
        return self.index if self.period_type is PeriodType.QUARTER else None

    @property
    def half_year(self) -> int | None:
        return self.index if self.period_type is PeriodType.HALF_YEAR else None

    def as_dict(self) -> dict[str, int]:
        """Render as ``{"year": .., "quarter"|"halfYear"|"month": ..}``."""
        key = {
            PeriodType.MONTH: "month",
            PeriodType.QUARTER: "quarter",
            PeriodType.HALF_YEAR: "halfYear",
            PeriodType.YEAR: "yearIndex",
        }[self.period_type]
        return {"year": self.year, key: self.index}


@dataclass(frozen=True, slots=True)
class DateDifference:
    """Absolute distance between two dates.

    ``weeks`` is set only for the weeks unit and ``months`` only for the
    months unit; ``days`` then holds the remainder.
    """

    days: int
    weeks: int | None = None
    months: int | None = None


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive start and end of a span, rendered as strings."""

    start: str
    end: str
