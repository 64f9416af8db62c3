"""
Gregorian (AD) calendar arithmetic.

Pure functions over the proleptic Gregorian leap rule.  No dependencies
beyond the kernel exceptions.
"""

from bs_kernel.exceptions import InvalidMonthError

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """True iff ``year`` is a Gregorian leap year."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_ad_month(year: int, month: int) -> int:
    """
    Number of days in AD ``month`` of ``year``.

    Raises:
        InvalidMonthError: if month is outside 1..12.
    """
    if month < 1 or month > 12:
        raise InvalidMonthError(month)
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def days_in_ad_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365
