"""
Tests for the BS period engine.

Covers:
- Month lengths under calendar and financial years
- Quarter/half/year lengths and their decomposition
- Period end and start dates, including the financial wrap into year + 1
- Classification of dates into periods and stepping to the next period
- Enumeration of period boundaries across a range
- Index, type and range validation
"""

import pytest

from bs_engines.periods import (
    advance_period,
    bs_month_range,
    derive_period,
    division_factor,
    enumerate_period_boundaries,
    half_year_end_date,
    half_year_length,
    month_end_date,
    month_length,
    month_lengths_for_year,
    next_period,
    period_end_date,
    period_length,
    period_start_date,
    quarter_end_date,
    quarter_length,
    year_end_date,
    year_length,
)
from bs_kernel.domain.values import (
    AccountingYearType,
    DateRange,
    PeriodRef,
    PeriodType,
)
from bs_kernel.exceptions import (
    InvalidConfigValueError,
    InvalidDateRangeError,
    InvalidDayError,
    InvalidHalfYearError,
    InvalidMonthError,
    InvalidPeriodIndexError,
    InvalidPeriodTypeError,
    InvalidQuarterError,
    YearOutOfRangeError,
)

CALENDAR = AccountingYearType.CALENDAR
FINANCIAL = AccountingYearType.FINANCIAL


class TestMonthLengthsForYear:
    """Twelve month lengths of an accounting year."""

    def test_calendar_is_table_row(self):
        assert month_lengths_for_year(2080, CALENDAR) == (
            31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30,
        )

    def test_financial_rotates_into_next_year(self):
        assert month_lengths_for_year(2080, "financial") == (
            32, 31, 30, 30, 30, 29, 29, 30, 30, 31, 31, 32,
        )

    def test_financial_needs_following_year(self):
        with pytest.raises(YearOutOfRangeError) as exc_info:
            month_lengths_for_year(2100, FINANCIAL)

        assert exc_info.value.year == 2101

    def test_unknown_year_type(self):
        with pytest.raises(InvalidConfigValueError):
            month_lengths_for_year(2080, "fiscal")


class TestLengths:
    """Period lengths."""

    def test_division_factor(self):
        assert division_factor("month") == 1
        assert division_factor(PeriodType.QUARTER) == 3
        assert division_factor("half-year") == 6
        assert division_factor("year") == 12

    def test_calendar_quarters(self):
        assert [quarter_length(2080, q) for q in range(1, 5)] == [94, 93, 89, 89]

    def test_calendar_halves(self):
        assert [half_year_length(2080, h) for h in (1, 2)] == [187, 178]

    def test_financial_quarters(self):
        assert [quarter_length(2080, q, FINANCIAL) for q in range(1, 5)] == [93, 89, 89, 94]

    def test_financial_halves(self):
        assert [half_year_length(2080, h, FINANCIAL) for h in (1, 2)] == [182, 183]

    def test_year_lengths(self):
        assert year_length(2080) == 365
        assert year_length(2081) == 366
        assert year_length(2080, FINANCIAL) == 365

    def test_leap_quarter(self):
        assert quarter_length(2081, 4) == 90

    def test_month_length(self):
        assert month_length(2080, 2) == 32
        # Financial month 1 is Shrawan
        assert month_length(2080, 1, FINANCIAL) == 32

    @pytest.mark.parametrize("year_type", [CALENDAR, FINANCIAL])
    def test_quarters_sum_to_halves_and_year(self, year_type):
        quarters = [quarter_length(2079, q, year_type) for q in range(1, 5)]
        halves = [half_year_length(2079, h, year_type) for h in (1, 2)]

        assert quarters[0] + quarters[1] == halves[0]
        assert quarters[2] + quarters[3] == halves[1]
        assert sum(halves) == year_length(2079, year_type)

    def test_invalid_quarter(self):
        with pytest.raises(InvalidQuarterError) as exc_info:
            quarter_length(2080, 5)

        assert str(exc_info.value) == (
            "Invalid quarter: Please provide a quarter between 1 and 4."
        )

    def test_invalid_half(self):
        with pytest.raises(InvalidHalfYearError) as exc_info:
            half_year_length(2080, 3)

        assert str(exc_info.value) == "Invalid half: Please provide a half of either 1 or 2."

    def test_invalid_month(self):
        with pytest.raises(InvalidMonthError):
            month_length(2080, 13)

    def test_invalid_year_index(self):
        with pytest.raises(InvalidPeriodIndexError):
            period_length(2080, 2, PeriodType.YEAR, CALENDAR)

    def test_year_checked_before_index(self):
        with pytest.raises(YearOutOfRangeError):
            quarter_length(1999, 5)

    def test_unknown_period_type(self):
        with pytest.raises(InvalidPeriodTypeError):
            period_length(2080, 1, "week", CALENDAR)


class TestEndDates:
    """Period end dates."""

    def test_calendar_quarter_end(self):
        assert quarter_end_date(2080, 1) == "2080-03-31"
        assert quarter_end_date(2081, 2) == "2081-06-30"

    def test_calendar_year_end(self):
        assert year_end_date(2080) == "2080-12-30"
        assert year_end_date(2100) == "2100-12-30"

    def test_month_end(self):
        assert month_end_date(2080, 2) == "2080-02-32"

    def test_financial_quarter_ends(self):
        assert quarter_end_date(2080, 1, FINANCIAL) == "2080-06-30"
        assert quarter_end_date(2080, 4, FINANCIAL) == "2081-03-32"

    def test_financial_half_ends(self):
        assert half_year_end_date(2080, 1, FINANCIAL) == "2080-09-29"
        assert half_year_end_date(2080, 2, FINANCIAL) == "2081-03-32"

    def test_financial_year_end(self):
        assert year_end_date(2080, FINANCIAL) == "2081-03-32"

    def test_financial_year_beyond_table(self):
        with pytest.raises(YearOutOfRangeError):
            year_end_date(2100, FINANCIAL)

    def test_calendar_year_beyond_table(self):
        with pytest.raises(YearOutOfRangeError):
            year_end_date(2101)

    def test_custom_format(self):
        assert quarter_end_date(2080, 1, CALENDAR, "DD/MM/YYYY") == "31/03/2080"

    def test_generic_end_date(self):
        assert period_end_date(2080, 2, "half-year", "calendar") == "2080-12-30"


class TestStartDates:
    """Period start dates."""

    def test_calendar_quarter_start(self):
        assert period_start_date(2080, 2, PeriodType.QUARTER, CALENDAR) == "2080-04-01"

    def test_financial_quarter_start(self):
        assert period_start_date(2080, 1, PeriodType.QUARTER, FINANCIAL) == "2080-04-01"
        assert period_start_date(2080, 4, PeriodType.QUARTER, FINANCIAL) == "2081-01-01"

    def test_bs_month_range(self):
        assert bs_month_range(2080, 2) == DateRange(start="2080-02-01", end="2080-02-32")


class TestDerivePeriod:
    """Classification of a date into its period."""

    def test_calendar_quarter(self):
        assert derive_period("2080-02-15", "quarter", CALENDAR) == PeriodRef(
            2080, 1, PeriodType.QUARTER
        )

    def test_financial_quarter_before_shrawan(self):
        ref = derive_period("2080-02-15", "quarter", FINANCIAL)
        assert (ref.year, ref.quarter) == (2079, 4)

    def test_financial_first_day(self):
        assert derive_period("2080-04-01", "quarter", FINANCIAL).quarter == 1
        assert derive_period("2080-04-01", "half-year", FINANCIAL).half_year == 1
        assert derive_period("2080-04-01", "quarter", FINANCIAL).year == 2080

    def test_financial_second_half(self):
        assert derive_period("2080-10-05", "quarter", FINANCIAL).quarter == 3
        assert derive_period("2080-10-05", "half-year", FINANCIAL).half_year == 2

    def test_month_period(self):
        assert derive_period("2080-02-15", "month", FINANCIAL) == PeriodRef(
            2079, 11, PeriodType.MONTH
        )

    def test_invalid_date(self):
        with pytest.raises(InvalidDayError):
            derive_period("2080-09-30", "quarter", CALENDAR)


class TestAdvancePeriod:
    """Stepping to the following period."""

    def test_quarter_wraps(self):
        assert advance_period(PeriodRef(2080, 4, PeriodType.QUARTER)) == PeriodRef(
            2081, 1, PeriodType.QUARTER
        )

    def test_half_wraps(self):
        assert advance_period(PeriodRef(2080, 2, PeriodType.HALF_YEAR)) == PeriodRef(
            2081, 1, PeriodType.HALF_YEAR
        )

    def test_month_steps(self):
        assert advance_period(PeriodRef(2080, 11, PeriodType.MONTH)) == PeriodRef(
            2080, 12, PeriodType.MONTH
        )

    def test_year_steps(self):
        assert advance_period(PeriodRef(2080, 1, PeriodType.YEAR)) == PeriodRef(
            2081, 1, PeriodType.YEAR
        )

    def test_invalid_ref(self):
        with pytest.raises(InvalidQuarterError):
            advance_period(PeriodRef(2080, 5, PeriodType.QUARTER))

    def test_next_period_agrees_with_derive(self):
        ref = next_period("2080-03-31", "quarter", CALENDAR)
        assert ref == derive_period("2080-04-01", "quarter", CALENDAR)

    def test_next_financial_period_crosses_year(self):
        ref = next_period("2081-02-10", "quarter", FINANCIAL)
        assert ref == PeriodRef(2081, 1, PeriodType.QUARTER)
        assert ref == derive_period("2081-04-01", "quarter", FINANCIAL)

    def test_wrap_past_table_raises(self):
        with pytest.raises(YearOutOfRangeError):
            next_period("2100-12-01", "quarter", CALENDAR)

    def test_financial_last_year_steps_within_year(self):
        assert next_period("2100-12-01", "quarter", FINANCIAL) == PeriodRef(
            2100, 4, PeriodType.QUARTER
        )


class TestEnumeratePeriodBoundaries:
    """Enumeration of period ends across a range."""

    def test_calendar_quarters(self):
        assert enumerate_period_boundaries(
            "2080-02-15", "2080-11-10", "quarter", CALENDAR
        ) == ["2080-02-15", "2080-03-31", "2080-06-30", "2080-09-29", "2080-11-10"]

    def test_financial_halves(self):
        assert enumerate_period_boundaries(
            "2080-05-01", "2081-05-01", "half-year", FINANCIAL
        ) == ["2080-05-01", "2080-09-29", "2081-03-32", "2081-05-01"]

    def test_calendar_halves(self):
        assert enumerate_period_boundaries(
            "2080-05-01", "2081-05-01", "half-year", CALENDAR
        ) == ["2080-05-01", "2080-06-30", "2080-12-30", "2081-05-01"]

    def test_end_on_period_end_appears_once(self):
        assert enumerate_period_boundaries(
            "2080-01-01", "2080-06-30", "quarter", CALENDAR
        ) == ["2080-01-01", "2080-03-31", "2080-06-30"]

    def test_start_on_period_end_appears_once(self):
        assert enumerate_period_boundaries(
            "2080-03-31", "2080-07-10", "quarter", CALENDAR
        ) == ["2080-03-31", "2080-06-30", "2080-07-10"]

    def test_same_start_and_end(self):
        assert enumerate_period_boundaries(
            "2080-05-01", "2080-05-01", "quarter", CALENDAR
        ) == ["2080-05-01"]

    def test_within_one_period(self):
        assert enumerate_period_boundaries(
            "2080-05-01", "2080-05-20", "quarter", CALENDAR
        ) == ["2080-05-01", "2080-05-20"]

    def test_end_before_start_raises(self):
        with pytest.raises(InvalidDateRangeError) as exc_info:
            enumerate_period_boundaries("2081-01-01", "2080-01-01", "quarter", CALENDAR)

        assert exc_info.value.start_date == "2081-01-01"

    def test_monthly(self):
        result = enumerate_period_boundaries("2080-01-15", "2080-04-15", "month", CALENDAR)
        assert result == ["2080-01-15", "2080-01-31", "2080-02-32", "2080-03-31", "2080-04-15"]

    def test_financial_half_year_near_table_end(self):
        assert enumerate_period_boundaries(
            "2100-05-01", "2100-12-20", "half-year", FINANCIAL
        ) == ["2100-05-01", "2100-09-30", "2100-12-20"]

    def test_financial_year_ending_past_table_stops_at_end(self):
        assert enumerate_period_boundaries(
            "2099-05-01", "2100-12-20", "year", FINANCIAL
        ) == ["2099-05-01", "2100-03-31", "2100-12-20"]

    def test_calendar_range_to_last_tabulated_day(self):
        assert enumerate_period_boundaries(
            "2100-08-01", "2100-12-30", "quarter", CALENDAR
        ) == ["2100-08-01", "2100-09-30", "2100-12-30"]

    def test_trace_emitted(self, captured_logs):
        enumerate_period_boundaries("2080-02-15", "2080-11-10", "quarter", CALENDAR)

        traces = [r for r in captured_logs() if r["message"] == "BS_ENGINE_TRACE"]
        assert [t["engine_name"] for t in traces] == ["period_boundaries"]
