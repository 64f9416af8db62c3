"""
Module: bs_engines.formatting
Responsibility:
    Render and parse ``YYYY-MM-DD`` style date strings, validate BS and AD
    date components, and compute approximate date differences.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import bs_kernel (domain + exceptions).

Invariants enforced:
    - ``format_date`` pads month and day to two digits, so every string it
      renders with the default pattern is fixed width and sorts
      lexicographically in date order.
    - Every public validator either returns a valid value or raises a typed
      CalendarKernelError; there is no "invalid" sentinel.

Failure modes:
    - InvalidDateFormatError for strings without three positive numeric
      components.
    - YearOutOfRangeError for BS years outside the table.
    - InvalidMonthError / InvalidDayError for out-of-range components.
    - InvalidUnitError from ``date_difference`` for an unknown unit.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime

from bs_kernel.domain.calendar_table import BS_MAX_YEAR, BS_MIN_YEAR, month_days
from bs_kernel.domain.gregorian import days_in_ad_month
from bs_kernel.domain.values import (
    DEFAULT_DATE_FORMAT,
    CalendarDate,
    DateDifference,
    DateUnit,
)
from bs_kernel.exceptions import (
    CalendarKernelError,
    InvalidDateFormatError,
    InvalidDayError,
    InvalidMonthError,
    YearOutOfRangeError,
)

# Average Gregorian month length used by the "months" difference unit.
AVERAGE_MONTH_DAYS = 30.44

_STRICT_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_date(
    year: int,
    month: int,
    day: int,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """
    Substitute ``YYYY``, ``MM`` and ``DD`` into ``date_format``.

    Each token is replaced once (its first occurrence).
    """
    return (
        date_format.replace("YYYY", str(year), 1)
        .replace("MM", f"{month:02d}", 1)
        .replace("DD", f"{day:02d}", 1)
    )


def parse_date_components(date_string: str) -> tuple[int, int, int]:
    """
    Split ``YYYY-MM-DD`` into integers.

    A time or zone suffix introduced by ``T``, ``Z``, ``+`` or a space is
    dropped first, so ``2024-11-04T14:12:38.258Z`` and ``2081-07-19+05:45``
    parse as dates.

    Raises:
        InvalidDateFormatError: unless exactly three positive numeric
            components remain.
    """
    if not isinstance(date_string, str):
        raise InvalidDateFormatError(date_string)

    head = re.split(r"[TZ +]", date_string.strip(), maxsplit=1)[0]
    parts = head.split("-")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidDateFormatError(date_string)

    year, month, day = (int(p) for p in parts)
    if not (year and month and day):
        raise InvalidDateFormatError(date_string)
    return year, month, day


def validate_year(year: int) -> None:
    """Raise YearOutOfRangeError unless ``year`` is a tabulated BS year."""
    if year < BS_MIN_YEAR or year > BS_MAX_YEAR:
        raise YearOutOfRangeError(year, BS_MIN_YEAR, BS_MAX_YEAR)


def validate_month(month: int) -> None:
    """Raise InvalidMonthError unless 1 <= month <= 12."""
    if month < 1 or month > 12:
        raise InvalidMonthError(month)


def validate_bs_date(year: int, month: int, day: int) -> CalendarDate:
    """Validate BS components against the month table."""
    validate_year(year)
    validate_month(month)
    max_day = month_days(year)[month - 1]
    if day < 1 or day > max_day:
        raise InvalidDayError(year, month, day, max_day)
    return CalendarDate(year, month, day)


def validate_ad_date(year: int, month: int, day: int) -> CalendarDate:
    """Validate AD components against the Gregorian month lengths."""
    validate_month(month)
    max_day = days_in_ad_month(year, month)
    if day < 1 or day > max_day:
        raise InvalidDayError(year, month, day, max_day)
    return CalendarDate(year, month, day)


def parse_bs_date(date_string: str) -> CalendarDate:
    """Parse and validate a BS date string."""
    return validate_bs_date(*parse_date_components(date_string))


def is_valid_bs_date(date_string: str) -> bool:
    """True if ``date_string`` is a zero-padded, tabulated BS date."""
    if not isinstance(date_string, str) or not _STRICT_DATE_RE.match(date_string):
        return False
    try:
        parse_bs_date(date_string)
    except CalendarKernelError:
        return False
    return True


def coerce_ad_date(value: str | date | datetime) -> CalendarDate:
    """
    Normalize an AD input to validated components.

    Accepts ISO strings (time suffix dropped), ``datetime.date`` and
    ``datetime.datetime``.  Aware datetimes are taken at face value; convert
    them to the wanted zone before calling.
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return CalendarDate(value.year, value.month, value.day)
    return validate_ad_date(*parse_date_components(value))


def _as_date(value: str | date | datetime) -> date:
    return date(*coerce_ad_date(value).as_tuple())


def date_difference(
    date1: str | date | datetime,
    date2: str | date | datetime,
    unit: DateUnit | str = DateUnit.DAYS,
) -> DateDifference:
    """
    Absolute distance between two AD dates.

    ``weeks`` splits into whole weeks plus remaining days.  ``months`` uses a
    fixed 30.44-day month and is an approximation, not calendar-aware.
    """
    unit = DateUnit.parse(unit)

    if isinstance(date1, datetime) and isinstance(date2, datetime):
        total_days = abs(date1 - date2).days
    else:
        total_days = abs((_as_date(date1) - _as_date(date2)).days)

    if unit is DateUnit.WEEKS:
        weeks, days = divmod(total_days, 7)
        return DateDifference(days=days, weeks=weeks)
    if unit is DateUnit.MONTHS:
        months = math.floor(total_days / AVERAGE_MONTH_DAYS)
        days = math.floor(total_days % AVERAGE_MONTH_DAYS)
        return DateDifference(days=days, months=months)
    return DateDifference(days=total_days)
