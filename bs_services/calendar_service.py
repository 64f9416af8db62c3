"""
bs_services.calendar_service -- Calendar operations under resolved settings.

Responsibility:
    Resolve the accounting-year type, calendar system, date format and time
    zone for each call (explicit override, pinned settings, or the ambient
    configuration, in that order) and delegate to the pure engines.  Also
    the only place "today" is computed, from an injected Clock.

Architecture position:
    Services -- orchestration over engines + kernel + config.
    Reads ``bs_config.get_active_config()`` at call time when no settings
    were pinned at construction.

Invariants enforced:
    - Ambient settings are read per call, never cached, so a later
      ``set_accounting_year_type`` affects subsequent calls of an existing
      service.
    - Explicit per-call overrides always win over pinned and ambient
      settings.
    - Enumerated period boundaries are rendered with ``YYYY-MM-DD`` whatever
      the configured date format, because they are compared as strings.

Failure modes:
    - Any CalendarKernelError raised by the engines propagates unchanged.
    - InvalidConfigValueError for an override that is not a member of its
      enumeration.

Usage:
    from bs_services.calendar_service import CalendarService
    from bs_kernel.domain.clock import DeterministicClock

    service = CalendarService(clock=DeterministicClock())
    service.convert_to_bs("2024-11-04")            # "2081-07-19"
    service.bs_quarter_end_date(2080, 1, "financial")   # "2080-06-30"
"""

from __future__ import annotations

from datetime import date, datetime

from bs_config import get_active_config
from bs_config.schema import CalendarSettings
from bs_engines import converter, formatting, periods
from bs_kernel.domain.clock import Clock, SystemClock, resolve_time_zone
from bs_kernel.domain.gregorian import days_in_ad_month
from bs_kernel.domain.values import (
    AccountingYearType,
    ADDateString,
    BSDateString,
    CalendarSystem,
    DateDifference,
    DateRange,
    DateUnit,
    PeriodRef,
    PeriodType,
)
from bs_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.calendar")


class CalendarService:
    """
    Public calendar API over the conversion and period engines.

    Contract:
        ``settings`` pins the service to fixed settings; None makes every
        call read the ambient configuration.  ``clock`` defaults to the
        system clock.
    Guarantees:
        - Every method accepts an optional override for the setting it
          depends on.
    Non-goals:
        - Does not mutate the ambient configuration.
    """

    def __init__(
        self,
        settings: CalendarSettings | None = None,
        clock: Clock | None = None,
    ):
        self._settings = settings
        self._clock = clock or SystemClock()

    @property
    def settings(self) -> CalendarSettings:
        if self._settings is not None:
            return self._settings
        return get_active_config()

    # -----------------------------------------------------------------
    # Setting resolution
    # -----------------------------------------------------------------

    def _year_type(self, year_type: AccountingYearType | str | None) -> AccountingYearType:
        if year_type is None:
            return self.settings.accounting_year_type
        return AccountingYearType.parse(year_type)

    def _calendar_system(self, calendar_system: CalendarSystem | str | None) -> CalendarSystem:
        if calendar_system is None:
            return self.settings.calendar_system
        return CalendarSystem.parse(calendar_system)

    def _date_format(self, date_format: str | None) -> str:
        return date_format or self.settings.date_format

    def time_zone(self) -> str:
        """Zone "today" is evaluated in: configured, else resolved from the host."""
        return self.settings.time_zone or resolve_time_zone()

    # -----------------------------------------------------------------
    # Conversion
    # -----------------------------------------------------------------

    def convert_to_bs(
        self,
        value: str | date | datetime,
        date_format: str | None = None,
    ) -> BSDateString:
        with LogContext.bind(operation="convert_to_bs"):
            return converter.convert_to_bs(value, self._date_format(date_format))

    def convert_to_ad(
        self,
        bs_date: str,
        date_format: str | None = None,
    ) -> ADDateString:
        with LogContext.bind(operation="convert_to_ad"):
            return converter.convert_to_ad(bs_date, self._date_format(date_format))

    def ad_month_range_from_bs_month(
        self,
        bs_year: int,
        bs_month: int,
        date_format: str | None = None,
    ) -> DateRange:
        """AD dates of the first and last day of a BS month."""
        return converter.ad_range_of_bs_month(
            bs_year, bs_month, self._date_format(date_format)
        )

    # -----------------------------------------------------------------
    # Today
    # -----------------------------------------------------------------

    def today(
        self,
        calendar_system: CalendarSystem | str | None = None,
        date_format: str | None = None,
    ) -> str:
        """Today's date in the requested (or configured) calendar system."""
        system = self._calendar_system(calendar_system)
        time_zone = self.time_zone()
        fmt = self._date_format(date_format)

        with LogContext.bind(operation="today", calendar_system=system.value):
            ad_today = self._clock.today(time_zone)
            logger.debug(
                "today_resolved",
                extra={"time_zone": time_zone, "ad_date": ad_today},
            )
            if system is CalendarSystem.BS:
                return converter.convert_to_bs(ad_today, fmt)
            return ADDateString(
                formatting.format_date(ad_today.year, ad_today.month, ad_today.day, fmt)
            )

    def todays_bs_date(self, date_format: str | None = None) -> BSDateString:
        return BSDateString(self.today(CalendarSystem.BS, date_format))

    def todays_ad_date(self, date_format: str | None = None) -> ADDateString:
        return ADDateString(self.today(CalendarSystem.AD, date_format))

    # -----------------------------------------------------------------
    # Lengths
    # -----------------------------------------------------------------

    def days_in_ad_month(self, year: int, month: int) -> int:
        return days_in_ad_month(year, month)

    def days_in_bs_month(self, year: int, month: int) -> int:
        return periods.month_length(year, month, AccountingYearType.CALENDAR)

    def days_in_bs_quarter(
        self,
        year: int,
        quarter: int,
        year_type: AccountingYearType | str | None = None,
    ) -> int:
        return periods.quarter_length(year, quarter, self._year_type(year_type))

    def days_in_bs_half_year(
        self,
        year: int,
        half: int,
        year_type: AccountingYearType | str | None = None,
    ) -> int:
        return periods.half_year_length(year, half, self._year_type(year_type))

    def days_in_bs_year(
        self,
        year: int,
        year_type: AccountingYearType | str | None = None,
    ) -> int:
        return periods.year_length(year, self._year_type(year_type))

    # -----------------------------------------------------------------
    # End dates
    # -----------------------------------------------------------------

    def bs_month_end_date(
        self,
        year: int,
        month: int,
        date_format: str | None = None,
    ) -> BSDateString:
        return periods.month_end_date(
            year, month, AccountingYearType.CALENDAR, self._date_format(date_format)
        )

    def bs_quarter_end_date(
        self,
        year: int,
        quarter: int,
        year_type: AccountingYearType | str | None = None,
        date_format: str | None = None,
    ) -> BSDateString:
        return periods.quarter_end_date(
            year, quarter, self._year_type(year_type), self._date_format(date_format)
        )

    def bs_half_year_end_date(
        self,
        year: int,
        half: int,
        year_type: AccountingYearType | str | None = None,
        date_format: str | None = None,
    ) -> BSDateString:
        return periods.half_year_end_date(
            year, half, self._year_type(year_type), self._date_format(date_format)
        )

    def bs_year_end_date(
        self,
        year: int,
        year_type: AccountingYearType | str | None = None,
        date_format: str | None = None,
    ) -> BSDateString:
        return periods.year_end_date(
            year, self._year_type(year_type), self._date_format(date_format)
        )

    def bs_period_end_date(
        self,
        year: int,
        index: int,
        period_type: PeriodType | str,
        year_type: AccountingYearType | str | None = None,
        date_format: str | None = None,
    ) -> BSDateString:
        return periods.period_end_date(
            year,
            index,
            period_type,
            self._year_type(year_type),
            self._date_format(date_format),
        )

    # -----------------------------------------------------------------
    # Periods
    # -----------------------------------------------------------------

    def period_of(
        self,
        bs_date: str,
        period_type: PeriodType | str = PeriodType.QUARTER,
        year_type: AccountingYearType | str | None = None,
    ) -> PeriodRef:
        """The period containing ``bs_date``."""
        return periods.derive_period(bs_date, period_type, self._year_type(year_type))

    def next_period(
        self,
        bs_date: str,
        period_type: PeriodType | str = PeriodType.QUARTER,
        year_type: AccountingYearType | str | None = None,
    ) -> PeriodRef:
        """The period after the one containing ``bs_date``."""
        return periods.next_period(bs_date, period_type, self._year_type(year_type))

    def period_boundaries(
        self,
        start_date: str,
        end_date: str,
        period_type: PeriodType | str = PeriodType.QUARTER,
        year_type: AccountingYearType | str | None = None,
    ) -> list[BSDateString]:
        """Start date, each period end strictly between, then end date."""
        resolved = self._year_type(year_type)
        with LogContext.bind(operation="period_boundaries", year_type=resolved.value):
            return periods.enumerate_period_boundaries(
                start_date, end_date, period_type, resolved
            )

    # -----------------------------------------------------------------
    # Differences
    # -----------------------------------------------------------------

    def date_difference(
        self,
        date1: str | date | datetime,
        date2: str | date | datetime,
        unit: DateUnit | str = DateUnit.DAYS,
    ) -> DateDifference:
        return formatting.date_difference(date1, date2, unit)

