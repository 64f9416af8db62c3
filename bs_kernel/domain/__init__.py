"""
Pure domain layer.

Calendar data, Gregorian arithmetic and value objects with NO dependencies
on I/O other than the clock boundary.  All domain objects are immutable and
deterministic.
"""

from bs_kernel.domain.calendar_table import (
    AD_ANCHOR,
    AD_ANCHOR_DAYS_INTO_YEAR,
    BS_ANCHOR,
    BS_MAX_YEAR,
    BS_MIN_YEAR,
    BS_MONTH_DAYS,
    SHORT_PROJECTED_YEARS,
    is_supported_year,
    month_days,
    year_days,
)
from bs_kernel.domain.clock import (
    FALLBACK_TIME_ZONE,
    Clock,
    DeterministicClock,
    SystemClock,
    is_known_zone,
    resolve_time_zone,
)
from bs_kernel.domain.gregorian import days_in_ad_month, days_in_ad_year, is_leap_year
from bs_kernel.domain.values import (
    DEFAULT_DATE_FORMAT,
    AccountingYearType,
    ADDateString,
    BSDateString,
    CalendarDate,
    CalendarSystem,
    DateDifference,
    DateRange,
    DateUnit,
    PeriodRef,
    PeriodType,
)

__all__ = [
    # Calendar table
    "AD_ANCHOR",
    "AD_ANCHOR_DAYS_INTO_YEAR",
    "BS_ANCHOR",
    "BS_MAX_YEAR",
    "BS_MIN_YEAR",
    "BS_MONTH_DAYS",
    "SHORT_PROJECTED_YEARS",
    "is_supported_year",
    "month_days",
    "year_days",
    # Clock
    "Clock",
    "DeterministicClock",
    "FALLBACK_TIME_ZONE",
    "SystemClock",
    "is_known_zone",
    "resolve_time_zone",
    # Gregorian
    "days_in_ad_month",
    "days_in_ad_year",
    "is_leap_year",
    # Values
    "DEFAULT_DATE_FORMAT",
    "AccountingYearType",
    "ADDateString",
    "BSDateString",
    "CalendarDate",
    "CalendarSystem",
    "DateDifference",
    "DateRange",
    "DateUnit",
    "PeriodRef",
    "PeriodType",
]
