"""
bs_services -- Package init and public API.

Responsibility:
    Calendar services that resolve settings (per-call override, pinned
    settings or ambient configuration) and read the clock, then delegate to
    the pure engines in bs_engines/.  The module-level functions below are
    bound to a default ``CalendarService`` that reads the ambient
    configuration and the system clock on every call.

Architecture position:
    Services -- orchestration over engines + kernel + config.

    Dependency direction:
        bs_services/ -> bs_engines/, bs_config/, bs_kernel/  (allowed)
        bs_engines/  -> bs_services/                          (FORBIDDEN)
        bs_kernel/   -> bs_services/                          (FORBIDDEN)

Failure modes:
    - CalendarKernelError subclasses propagated from the engines.
"""

from bs_kernel.logging_config import get_logger

logger = get_logger("services")

from bs_services.calendar_service import CalendarService

_default_service = CalendarService()

convert_to_bs = _default_service.convert_to_bs
convert_to_ad = _default_service.convert_to_ad
today = _default_service.today
todays_bs_date = _default_service.todays_bs_date
todays_ad_date = _default_service.todays_ad_date
days_in_ad_month = _default_service.days_in_ad_month
days_in_bs_month = _default_service.days_in_bs_month
days_in_bs_quarter = _default_service.days_in_bs_quarter
days_in_bs_half_year = _default_service.days_in_bs_half_year
days_in_bs_year = _default_service.days_in_bs_year
bs_month_end_date = _default_service.bs_month_end_date
bs_quarter_end_date = _default_service.bs_quarter_end_date
bs_half_year_end_date = _default_service.bs_half_year_end_date
bs_year_end_date = _default_service.bs_year_end_date
bs_period_end_date = _default_service.bs_period_end_date
ad_month_range_from_bs_month = _default_service.ad_month_range_from_bs_month
period_of = _default_service.period_of
next_period = _default_service.next_period
period_boundaries = _default_service.period_boundaries
date_difference = _default_service.date_difference

__all__ = [
    "CalendarService",
    "ad_month_range_from_bs_month",
    "bs_half_year_end_date",
    "bs_month_end_date",
    "bs_period_end_date",
    "bs_quarter_end_date",
    "bs_year_end_date",
    "convert_to_ad",
    "convert_to_bs",
    "date_difference",
    "days_in_ad_month",
    "days_in_bs_half_year",
    "days_in_bs_month",
    "days_in_bs_quarter",
    "days_in_bs_year",
    "next_period",
    "period_boundaries",
    "period_of",
    "today",
    "todays_ad_date",
    "todays_bs_date",
]
