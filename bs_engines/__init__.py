"""
Module: bs_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for higher
    layers (bs_services, scripts.cli).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import bs_kernel (and sibling engine modules).
    MUST NOT import bs_config or bs_services.

Invariants enforced:
    - Purity: engines NEVER read the clock or the ambient configuration.
      The current date and the accounting-year type are passed in by
      callers.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - CalendarKernelError subclasses propagated from individual engines on
      invalid input.

Usage:
    from bs_engines import convert_to_bs, convert_to_ad
    from bs_engines import derive_period, enumerate_period_boundaries
"""

from bs_kernel.logging_config import get_logger

logger = get_logger("engines")

from bs_engines.converter import (
    ad_range_of_bs_month,
    convert_ad_to_bs,
    convert_bs_to_ad,
    convert_to_ad,
    convert_to_bs,
    total_days_from_ad_anchor,
    total_days_from_bs_anchor,
)
from bs_engines.formatting import (
    AVERAGE_MONTH_DAYS,
    coerce_ad_date,
    date_difference,
    format_date,
    is_valid_bs_date,
    parse_bs_date,
    parse_date_components,
    validate_ad_date,
    validate_bs_date,
    validate_month,
    validate_year,
)
from bs_engines.periods import (
    FISCAL_START_MONTH,
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
from bs_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Converter
    "ad_range_of_bs_month",
    "convert_ad_to_bs",
    "convert_bs_to_ad",
    "convert_to_ad",
    "convert_to_bs",
    "total_days_from_ad_anchor",
    "total_days_from_bs_anchor",
    # Formatting
    "AVERAGE_MONTH_DAYS",
    "coerce_ad_date",
    "date_difference",
    "format_date",
    "is_valid_bs_date",
    "parse_bs_date",
    "parse_date_components",
    "validate_ad_date",
    "validate_bs_date",
    "validate_month",
    "validate_year",
    # Periods
    "FISCAL_START_MONTH",
    "advance_period",
    "bs_month_range",
    "derive_period",
    "division_factor",
    "enumerate_period_boundaries",
    "half_year_end_date",
    "half_year_length",
    "month_end_date",
    "month_length",
    "month_lengths_for_year",
    "next_period",
    "period_end_date",
    "period_length",
    "period_start_date",
    "quarter_end_date",
    "quarter_length",
    "year_end_date",
    "year_length",
    # Tracer
    "compute_input_fingerprint",
    "traced_engine",
]
