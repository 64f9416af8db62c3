"""
Typed Exception Hierarchy for the Calendar Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Date conversion fails in a small number of well-defined ways: a value is
outside its domain (month 13, quarter 5), a year is outside the tabulated
range, or a string cannot be parsed at all. Callers need to tell these apart
without parsing message text:

    try:
        bs = convert_to_bs(user_input)
    except YearOutOfRangeError as e:
        reply(code=e.code, year=e.year, supported=(e.min_year, e.max_year))
    except FormatError:
        reply(code="BAD_INPUT")

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    CalendarKernelError (base)
    |
    +-- DomainError
    |   +-- InvalidMonthError
    |   +-- InvalidDayError
    |   +-- InvalidQuarterError
    |   +-- InvalidHalfYearError
    |   +-- InvalidPeriodIndexError
    |   +-- InvalidPeriodTypeError
    |   +-- InvalidUnitError
    |   +-- InvalidConfigValueError
    |   +-- InvalidDateRangeError
    |
    +-- RangeError
    |   +-- YearOutOfRangeError
    |   +-- DateBeforeAnchorError
    |
    +-- FormatError
        +-- InvalidDateFormatError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category | Code                   | When Raised
---------|------------------------|---------------------------------------------
Domain   | INVALID_MONTH          | Month outside 1..12
         | INVALID_DAY            | Day outside 1..length of that month
         | INVALID_QUARTER        | Quarter outside 1..4
         | INVALID_HALF_YEAR      | Half outside 1..2
         | INVALID_PERIOD_INDEX   | Period index invalid for its period type
         | INVALID_PERIOD_TYPE    | Unknown period type
         | INVALID_UNIT           | Unknown difference unit
         | INVALID_CONFIG_VALUE   | Unknown accounting-year type / calendar
         | INVALID_DATE_RANGE     | End date precedes start date
---------|------------------------|---------------------------------------------
Range    | YEAR_OUT_OF_RANGE      | BS year outside the tabulated interval
         | DATE_BEFORE_ANCHOR     | AD date earlier than the conversion anchor
---------|------------------------|---------------------------------------------
Format   | INVALID_DATE_FORMAT    | Unparseable date string
"""


class CalendarKernelError(Exception):
    """
    Base exception for all calendar kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "CALENDAR_KERNEL_ERROR"


# Domain exceptions (value-range and enumeration violations)


class DomainError(CalendarKernelError):
    """Base exception for values outside their permitted domain."""

    code: str = "DOMAIN_ERROR"


class InvalidMonthError(DomainError):
    """Month number is outside 1..12."""

    code: str = "INVALID_MONTH"

    def __init__(self, month: int):
        self.month = month
        super().__init__("Invalid month: Please provide a month between 1 and 12.")


class InvalidDayError(DomainError):
    """Day of month is outside the length of that month."""

    code: str = "INVALID_DAY"

    def __init__(self, year: int, month: int, day: int, max_day: int):
        self.year = year
        self.month = month
        self.day = day
        self.max_day = max_day
        super().__init__(
            f"Invalid day: {year}-{month:02d} has {max_day} days, got {day}."
        )


class InvalidQuarterError(DomainError):
    """Quarter index is outside 1..4."""

    code: str = "INVALID_QUARTER"

    def __init__(self, quarter: int):
        self.quarter = quarter
        super().__init__(
            "Invalid quarter: Please provide a quarter between 1 and 4."
        )


class InvalidHalfYearError(DomainError):
    """Half-year index is neither 1 nor 2."""

    code: str = "INVALID_HALF_YEAR"

    def __init__(self, half: int):
        self.half = half
        super().__init__("Invalid half: Please provide a half of either 1 or 2.")


class InvalidPeriodIndexError(DomainError):
    """Period index is invalid for a period type with no dedicated error."""

    code: str = "INVALID_PERIOD_INDEX"

    def __init__(self, period_type: str, index: int, max_index: int):
        self.period_type = period_type
        self.index = index
        self.max_index = max_index
        super().__init__(
            f"Invalid {period_type} index {index}: "
            f"Please provide an index between 1 and {max_index}."
        )


class InvalidPeriodTypeError(DomainError):
    """Period type is not one of month, quarter, half-year, year."""

    code: str = "INVALID_PERIOD_TYPE"

    def __init__(self, period_type: str):
        self.period_type = period_type
        super().__init__(
            f"Invalid periodType '{period_type}'. "
            'Use "month", "quarter", "half-year" or "year".'
        )


class InvalidUnitError(DomainError):
    """Date-difference unit is not one of days, weeks, months."""

    code: str = "INVALID_UNIT"

    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Invalid unit '{unit}'. Use days, weeks or months.")


class InvalidConfigValueError(DomainError):
    """Configuration value is not a member of its enumeration."""

    code: str = "INVALID_CONFIG_VALUE"

    def __init__(self, setting: str, value: object, allowed: tuple[str, ...]):
        self.setting = setting
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid {setting}: {value!r}. Allowed values: {', '.join(allowed)}."
        )


class InvalidDateRangeError(DomainError):
    """End of a date range precedes its start."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, start_date: str, end_date: str):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Invalid date range: end date {end_date} precedes start date {start_date}."
        )


# Range exceptions (outside the tabulated calendar data)


class RangeError(CalendarKernelError):
    """Base exception for dates or years outside the supported table."""

    code: str = "RANGE_ERROR"


class YearOutOfRangeError(RangeError):
    """BS year is outside the tabulated interval."""

    code: str = "YEAR_OUT_OF_RANGE"

    def __init__(self, year: int, min_year: int, max_year: int):
        self.year = year
        self.min_year = min_year
        self.max_year = max_year
        super().__init__(
            f"BS year exceeds the available range ({min_year}-{max_year})."
        )


class DateBeforeAnchorError(RangeError):
    """AD date precedes the conversion anchor."""

    code: str = "DATE_BEFORE_ANCHOR"

    def __init__(self, ad_date: str, anchor_date: str):
        self.ad_date = ad_date
        self.anchor_date = anchor_date
        super().__init__("AD year goes beyond the available range.")


# Format exceptions


class FormatError(CalendarKernelError):
    """Base exception for unparseable input."""

    code: str = "FORMAT_ERROR"


class InvalidDateFormatError(FormatError):
    """Date string does not contain three positive numeric components."""

    code: str = "INVALID_DATE_FORMAT"

    def __init__(self, value: object):
        self.value = value
        super().__init__("Invalid date: Please provide a valid date.")
