"""
Module: bs_engines.periods
Responsibility:
    Accounting-period arithmetic on the BS calendar: month, quarter,
    half-year and year lengths and boundaries under the "calendar" and
    "financial" year conventions, classification of a date into its period,
    stepping to the following period, and enumeration of period ends across
    a date range.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import bs_kernel (domain + exceptions) and sibling engines.
    The accounting-year type is always an explicit argument here; ambient
    defaults are resolved by bs_services.

Invariants enforced:
    - A financial year ``Y`` is months 4..12 of ``Y`` followed by months 1..3
      of ``Y + 1``; every quarter/half boundary shifts by three months.
    - Quarter lengths sum to the half lengths, which sum to the year length,
      under both conventions.
    - ``advance_period(derive_period(d))`` equals ``derive_period(d')`` for
      any date ``d'`` in the following period.
    - Enumerated boundaries start with the given start date, end with the
      given end date, and are strictly increasing in between.
    - No month length is ever defaulted: a lookup outside the table raises.

Failure modes:
    - YearOutOfRangeError for any BS year the computation touches that is
      outside 2000..2100.
    - InvalidMonthError / InvalidQuarterError / InvalidHalfYearError /
      InvalidPeriodIndexError for bad period indices.
    - InvalidPeriodTypeError / InvalidConfigValueError for unknown period
      or year types.
    - InvalidDateRangeError when an enumeration's end precedes its start.
"""

from __future__ import annotations

from bs_engines.formatting import (
    format_date,
    parse_bs_date,
    validate_bs_date,
    validate_year,
)
from bs_engines.tracer import traced_engine
from bs_kernel.domain.calendar_table import BS_MAX_YEAR, month_days
from bs_kernel.domain.values import (
    DEFAULT_DATE_FORMAT,
    AccountingYearType,
    BSDateString,
    DateRange,
    PeriodRef,
    PeriodType,
)
from bs_kernel.exceptions import (
    InvalidDateRangeError,
    InvalidHalfYearError,
    InvalidMonthError,
    InvalidPeriodIndexError,
    InvalidQuarterError,
)
from bs_kernel.logging_config import get_logger

logger = get_logger("engines.periods")

# Shrawan, the first month of the financial year.
FISCAL_START_MONTH = 4
_FISCAL_SHIFT = FISCAL_START_MONTH - 1


def month_lengths_for_year(
    year: int,
    year_type: AccountingYearType | str,
) -> tuple[int, ...]:
    """
    The twelve month lengths of an accounting year.

    CALENDAR: the table row for ``year``.  FINANCIAL: months 4..12 of
    ``year`` followed by months 1..3 of ``year + 1``.

    Raises:
        YearOutOfRangeError: if a contributing year is not tabulated.
    """
    year_type = AccountingYearType.parse(year_type)
    if year_type is AccountingYearType.CALENDAR:
        return month_days(year)
    return month_days(year)[_FISCAL_SHIFT:] + month_days(year + 1)[:_FISCAL_SHIFT]


def division_factor(period_type: PeriodType | str) -> int:
    """Months per period: 1, 3, 6 or 12."""
    return PeriodType.parse(period_type).months


def _validate_index(period_type: PeriodType, index: int) -> None:
    count = period_type.periods_per_year
    if 1 <= index <= count:
        return
    if period_type is PeriodType.QUARTER:
        raise InvalidQuarterError(index)
    if period_type is PeriodType.HALF_YEAR:
        raise InvalidHalfYearError(index)
    if period_type is PeriodType.MONTH:
        raise InvalidMonthError(index)
    raise InvalidPeriodIndexError(period_type.value, index, count)


def _calendar_month(
    year: int,
    position: int,
    year_type: AccountingYearType,
) -> tuple[int, int]:
    """Map a 1-based position in an accounting year to (BS year, BS month)."""
    if year_type is AccountingYearType.CALENDAR:
        return year, position
    month = position + _FISCAL_SHIFT
    if month > 12:
        return year + 1, month - 12
    return year, month


# ---------------------------------------------------------------------------
# Lengths
# ---------------------------------------------------------------------------


def period_length(
    year: int,
    index: int,
    period_type: PeriodType | str,
    year_type: AccountingYearType | str,
) -> int:
    """Number of days in period ``index`` of accounting year ``year``."""
    period_type = PeriodType.parse(period_type)
    validate_year(year)
    _validate_index(period_type, index)
    lengths = month_lengths_for_year(year, year_type)
    span = period_type.months
    return sum(lengths[(index - 1) * span: index * span])


def month_length(
    year: int,
    month: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
) -> int:
    return period_length(year, month, PeriodType.MONTH, year_type)


def quarter_length(
    year: int,
    quarter: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
) -> int:
    return period_length(year, quarter, PeriodType.QUARTER, year_type)


def half_year_length(
    year: int,
    half: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
) -> int:
    return period_length(year, half, PeriodType.HALF_YEAR, year_type)


def year_length(
    year: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
) -> int:
    return period_length(year, 1, PeriodType.YEAR, year_type)


# ---------------------------------------------------------------------------
# Boundaries
# ---------------------------------------------------------------------------


def period_end_date(
    year: int,
    index: int,
    period_type: PeriodType | str,
    year_type: AccountingYearType | str,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    """
    Last day of period ``index`` of accounting year ``year``.

    For FINANCIAL years, positions past the twelfth calendar month wrap into
    ``year + 1``.  Only the month that holds the end date is looked up.
    """
    period_type = PeriodType.parse(period_type)
    year_type = AccountingYearType.parse(year_type)
    _validate_index(period_type, index)

    end_year, end_month = _calendar_month(year, index * period_type.months, year_type)
    last_day = month_days(end_year)[end_month - 1]
    return BSDateString(format_date(end_year, end_month, last_day, date_format))


def period_start_date(
    year: int,
    index: int,
    period_type: PeriodType | str,
    year_type: AccountingYearType | str,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    """First day of period ``index`` of accounting year ``year``."""
    period_type = PeriodType.parse(period_type)
    year_type = AccountingYearType.parse(year_type)
    _validate_index(period_type, index)

    first_position = (index - 1) * period_type.months + 1
    start_year, start_month = _calendar_month(year, first_position, year_type)
    month_days(start_year)
    return BSDateString(format_date(start_year, start_month, 1, date_format))


def month_end_date(
    year: int,
    month: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    return period_end_date(year, month, PeriodType.MONTH, year_type, date_format)


def quarter_end_date(
    year: int,
    quarter: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    return period_end_date(year, quarter, PeriodType.QUARTER, year_type, date_format)


def half_year_end_date(
    year: int,
    half: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    return period_end_date(year, half, PeriodType.HALF_YEAR, year_type, date_format)


def year_end_date(
    year: int,
    year_type: AccountingYearType | str = AccountingYearType.CALENDAR,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> BSDateString:
    return period_end_date(year, 1, PeriodType.YEAR, year_type, date_format)


def bs_month_range(
    year: int,
    month: int,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> DateRange:
    """First and last day of a BS calendar month."""
    validate_bs_date(year, month, 1)
    return DateRange(
        start=BSDateString(format_date(year, month, 1, date_format)),
        end=month_end_date(year, month, AccountingYearType.CALENDAR, date_format),
    )


# ---------------------------------------------------------------------------
# Classification and stepping
# ---------------------------------------------------------------------------


def derive_period(
    date_string: str,
    period_type: PeriodType | str,
    year_type: AccountingYearType | str,
) -> PeriodRef:
    """
    The period that contains a BS date.

    FINANCIAL: months before Shrawan belong to the previous year's
    accounting year, and months are re-indexed so that Shrawan is 1.
    """
    period_type = PeriodType.parse(period_type)
    year_type = AccountingYearType.parse(year_type)
    bs = parse_bs_date(date_string)

    year, month = bs.year, bs.month
    if year_type is AccountingYearType.FINANCIAL:
        if month < FISCAL_START_MONTH:
            year -= 1
            month += 12 - _FISCAL_SHIFT
        else:
            month -= _FISCAL_SHIFT

    index = (month - 1) // period_type.months + 1
    return PeriodRef(year=year, index=index, period_type=period_type)


def advance_period(ref: PeriodRef) -> PeriodRef:
    """
    The period immediately after ``ref``, wrapping into the next year.

    Raises:
        YearOutOfRangeError: if the wrap lands on a year past the table.
    """
    _validate_index(ref.period_type, ref.index)
    if ref.index >= ref.period_type.periods_per_year:
        validate_year(ref.year + 1)
        return PeriodRef(year=ref.year + 1, index=1, period_type=ref.period_type)
    return PeriodRef(year=ref.year, index=ref.index + 1, period_type=ref.period_type)


def next_period(
    date_string: str,
    period_type: PeriodType | str,
    year_type: AccountingYearType | str,
) -> PeriodRef:
    """The period after the one containing ``date_string``."""
    return advance_period(derive_period(date_string, period_type, year_type))


@traced_engine(
    "period_boundaries",
    "1.0",
    fingerprint_fields=("start_date", "end_date", "period_type", "year_type"),
)
def enumerate_period_boundaries(
    start_date: str,
    end_date: str,
    period_type: PeriodType | str,
    year_type: AccountingYearType | str,
) -> list[BSDateString]:
    """
    ``start_date``, every period end strictly between, then ``end_date``.

    Comparison is lexicographic on zero-padded ``YYYY-MM-DD`` strings.
    ``end_date`` appears once even when it is itself a period end.  A
    period whose end falls past the table ends the walk, since it lies
    after any tabulated ``end_date``.

    Raises:
        InvalidDateRangeError: if ``end_date`` precedes ``start_date``.
    """
    period_type = PeriodType.parse(period_type)
    year_type = AccountingYearType.parse(year_type)
    start = str(parse_bs_date(start_date))
    end = str(parse_bs_date(end_date))
    if end < start:
        raise InvalidDateRangeError(start_date, end_date)

    boundaries = [BSDateString(start_date)]
    if start == end:
        return boundaries

    ref = derive_period(start, period_type, year_type)
    while True:
        end_year, _ = _calendar_month(
            ref.year, ref.index * period_type.months, year_type
        )
        if end_year > BS_MAX_YEAR:
            break
        period_end = period_end_date(ref.year, ref.index, period_type, year_type)
        if period_end >= end:
            break
        if period_end > start:
            boundaries.append(period_end)
        ref = advance_period(ref)

    boundaries.append(BSDateString(end_date))

    logger.debug(
        "period_boundaries_enumerated",
        extra={
            "start_date": start,
            "end_date": end,
            "period_type": period_type.value,
            "year_type": year_type.value,
            "boundary_count": len(boundaries),
        },
    )
    return boundaries
