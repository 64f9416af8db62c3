"""
Module: bs_engines.converter
Responsibility:
    Convert dates between the Gregorian (AD) and Bikram Sambat (BS)
    calendars by counting days from the anchor correspondence
    (BS 2000-01-01 == AD 1943-04-14).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import bs_kernel (domain + exceptions) and sibling engines.

Invariants enforced:
    - Round trip: ``convert_bs_to_ad(*convert_ad_to_bs(d))`` returns ``d``
      for every AD date whose BS image is tabulated, and symmetrically.
    - Offsets are exact integer day counts; no date library arithmetic is
      involved, so the table is the single source of truth.

Failure modes:
    - DateBeforeAnchorError when an AD date precedes 1943-04-14.
    - YearOutOfRangeError when a BS year (given or implied) is outside
      2000..2100.
    - InvalidMonthError / InvalidDayError for impossible components.
    - InvalidDateFormatError for unparseable strings.

Usage:
    from bs_engines.converter import convert_to_bs, convert_to_ad

    convert_to_bs("2024-11-04")   # "2081-07-19"
    convert_to_ad("2081-07-19")   # "2024-11-04"
"""

from __future__ import annotations

from datetime import date, datetime

from bs_engines.formatting import (
    coerce_ad_date,
    format_date,
    parse_date_components,
    validate_ad_date,
    validate_bs_date,
)
from bs_engines.tracer import traced_engine
from bs_kernel.domain.calendar_table import (
    AD_ANCHOR,
    AD_ANCHOR_DAYS_INTO_YEAR,
    BS_ANCHOR,
    BS_MAX_YEAR,
    BS_MIN_YEAR,
    is_supported_year,
    month_days,
    year_days,
)
from bs_kernel.domain.gregorian import days_in_ad_month, days_in_ad_year
from bs_kernel.domain.values import (
    DEFAULT_DATE_FORMAT,
    ADDateString,
    BSDateString,
    CalendarDate,
    DateRange,
)
from bs_kernel.exceptions import DateBeforeAnchorError, YearOutOfRangeError
from bs_kernel.logging_config import get_logger

logger = get_logger("engines.converter")


def total_days_from_ad_anchor(ad_year: int, ad_month: int, ad_day: int) -> int:
    """
    Signed number of days from the AD anchor to the given AD date.

    Whole years from the anchor year are added (or, for earlier years,
    subtracted), then whole months of the target year, then the day.
    """
    total = -AD_ANCHOR_DAYS_INTO_YEAR

    for year in range(AD_ANCHOR.year, ad_year):
        total += days_in_ad_year(year)
    for year in range(ad_year, AD_ANCHOR.year):
        total -= days_in_ad_year(year)

    for month in range(1, ad_month):
        total += days_in_ad_month(ad_year, month)

    total += ad_day - 1
    return total


def total_days_from_bs_anchor(bs_year: int, bs_month: int, bs_day: int) -> int:
    """
    Number of days from the BS anchor to the given BS date.

    Raises:
        YearOutOfRangeError: if ``bs_year`` is not tabulated.
    """
    if not is_supported_year(bs_year):
        raise YearOutOfRangeError(bs_year, BS_MIN_YEAR, BS_MAX_YEAR)

    total = 0
    for year in range(BS_ANCHOR.year, bs_year):
        if not is_supported_year(year):
            logger.warning(
                "bs_year_summation_gap",
                extra={"missing_year": year, "target_year": bs_year},
            )
            break
        total += year_days(year)

    total += sum(month_days(bs_year)[: bs_month - 1])
    total += bs_day - 1
    return total


def _next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def convert_ad_to_bs(ad_year: int, ad_month: int, ad_day: int) -> CalendarDate:
    """
    Convert AD components to a BS date.

    Walks BS months forward from the anchor, consuming whole months while
    the remaining offset covers them, then places the rest as the day of
    month with one overflow correction.

    Raises:
        DateBeforeAnchorError: for dates before 1943-04-14.
        YearOutOfRangeError: if the result would fall after BS 2100.
    """
    ad_date = validate_ad_date(ad_year, ad_month, ad_day)
    if ad_date < AD_ANCHOR:
        logger.warning(
            "ad_date_before_anchor",
            extra={"ad_date": str(ad_date), "anchor_date": str(AD_ANCHOR)},
        )
        raise DateBeforeAnchorError(str(ad_date), str(AD_ANCHOR))

    remaining = total_days_from_ad_anchor(ad_year, ad_month, ad_day)

    year, month, day = BS_ANCHOR.as_tuple()
    lengths = month_days(year)
    while remaining >= lengths[month - 1]:
        remaining -= lengths[month - 1]
        year, month = _next_month(year, month)
        lengths = month_days(year)

    day += remaining
    if day > lengths[month - 1]:
        day -= lengths[month - 1]
        year, month = _next_month(year, month)
        if not is_supported_year(year):
            raise YearOutOfRangeError(year, BS_MIN_YEAR, BS_MAX_YEAR)

    return CalendarDate(year, month, day)


def convert_bs_to_ad(bs_year: int, bs_month: int, bs_day: int) -> CalendarDate:
    """
    Convert BS components to an AD date.

    Walks AD months forward from the anchor while the remaining offset
    covers a whole month, then adds the rest to the day of month, carrying
    into the next month when it overflows.

    Raises:
        YearOutOfRangeError: for BS years outside 2000..2100.
        InvalidMonthError / InvalidDayError: for impossible components.
    """
    validate_bs_date(bs_year, bs_month, bs_day)
    remaining = total_days_from_bs_anchor(bs_year, bs_month, bs_day)

    year, month, day = AD_ANCHOR.as_tuple()
    while remaining > 0:
        month_length = days_in_ad_month(year, month)
        if remaining < month_length:
            day += remaining
            if day > month_length:
                day -= month_length
                year, month = _next_month(year, month)
            remaining = 0
        else:
            remaining -= month_length
            year, month = _next_month(year, month)

    return CalendarDate(year, month, day)


@traced_engine("converter", "1.0", fingerprint_fields=("value", "date_format"))
def convert_to_bs(
    value: str | date | datetime,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    """Convert an AD string or date object to a formatted BS string."""
    ad = coerce_ad_date(value)
    bs = convert_ad_to_bs(*ad.as_tuple())
    return BSDateString(format_date(bs.year, bs.month, bs.day, date_format))


@traced_engine("converter", "1.0", fingerprint_fields=("bs_date", "date_format"))
def convert_to_ad(
    bs_date: str,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> ADDateString:
    """Convert a BS ``YYYY-MM-DD`` string to a formatted AD string."""
    ad = convert_bs_to_ad(*parse_date_components(bs_date))
    return ADDateString(format_date(ad.year, ad.month, ad.day, date_format))


def ad_range_of_bs_month(
    bs_year: int,
    bs_month: int,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> DateRange:
    """AD dates of the first and last day of a BS month."""
    validate_bs_date(bs_year, bs_month, 1)
    last_day = month_days(bs_year)[bs_month - 1]
    start = convert_bs_to_ad(bs_year, bs_month, 1)
    end = convert_bs_to_ad(bs_year, bs_month, last_day)
    return DateRange(
        start=ADDateString(format_date(start.year, start.month, start.day, date_format)),
        end=ADDateString(format_date(end.year, end.month, end.day, date_format)),
    )
