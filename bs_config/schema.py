"""
CalendarSettings schema.

Defines the settings every calendar call is evaluated under.  YAML files are
parsed into this type by the loader; the ambient configuration in
``bs_config`` holds one instance per context.
"""

from __future__ import annotations

from dataclasses import dataclass, replace as _replace
from typing import Any

from bs_kernel.domain.clock import is_known_zone
from bs_kernel.domain.values import (
    DEFAULT_DATE_FORMAT,
    AccountingYearType,
    CalendarSystem,
)
from bs_kernel.exceptions import InvalidConfigValueError

_DATE_TOKENS = ("YYYY", "MM", "DD")


@dataclass(frozen=True)
class CalendarSettings:
    """
    Settings for date conversion and period arithmetic.

    ``time_zone`` of None means "resolve from the host" (TZ variable, then
    the /etc/localtime link, then Asia/Kathmandu).
    """

    accounting_year_type: AccountingYearType = AccountingYearType.CALENDAR
    calendar_system: CalendarSystem = CalendarSystem.AD
    date_format: str = DEFAULT_DATE_FORMAT
    time_zone: str | None = None

    def __post_init__(self) -> None:
        # Normalize enum members given as plain strings.
        object.__setattr__(
            self,
            "accounting_year_type",
            AccountingYearType.parse(self.accounting_year_type),
        )
        object.__setattr__(
            self, "calendar_system", CalendarSystem.parse(self.calendar_system)
        )

        if not isinstance(self.date_format, str) or not all(
            token in self.date_format for token in _DATE_TOKENS
        ):
            raise InvalidConfigValueError(
                "date format", self.date_format, ("pattern containing YYYY, MM and DD",)
            )
        if self.time_zone is not None and not is_known_zone(self.time_zone):
            raise InvalidConfigValueError(
                "time zone", self.time_zone, ("IANA zone name",)
            )

    def replace(self, **changes: Any) -> CalendarSettings:
        """Copy with ``changes`` applied and re-validated."""
        return _replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return {
            "accounting_year_type": self.accounting_year_type.value,
            "calendar_system": self.calendar_system.value,
            "date_format": self.date_format,
            "time_zone": self.time_zone,
        }
