"""
bs_config -- single public entrypoint for calendar configuration.

Responsibility:
    Holds the ambient ``CalendarSettings`` that calls without explicit
    settings are evaluated under, and exposes the setters and getters that
    change it.  YAML loading lives in ``bs_config.loader``.

Architecture position:
    Configuration -- sits above ``bs_kernel`` and below ``bs_services``.
    Engines MUST NEVER import from ``bs_config``; services resolve the
    ambient values and pass them to engines explicitly.

Invariants enforced:
    - The ambient settings live in a ``ContextVar``: a change made inside
      one thread or asyncio task is invisible to the others, and
      ``using_config`` restores the previous value on exit.
    - Setters validate before storing.  An invalid value raises
      ``InvalidConfigValueError`` and the previous settings stay active.
    - Reads happen at call time; nothing downstream caches the value.

Failure modes:
    - ``InvalidConfigValueError`` -- unknown accounting-year type, calendar
      system, date format or time zone.

Audit relevance:
    Every change emits a ``calendar_config_changed`` log record carrying
    the previous and the new values.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from bs_config.loader import load_settings, load_yaml_file, parse_settings
from bs_config.schema import CalendarSettings
from bs_kernel.domain.values import AccountingYearType, CalendarSystem
from bs_kernel.logging_config import get_logger

logger = get_logger("config")

_DEFAULT_SETTINGS = CalendarSettings()

_active_settings: ContextVar[CalendarSettings] = ContextVar(
    "bs_calendar_settings", default=_DEFAULT_SETTINGS
)


def get_active_config() -> CalendarSettings:
    """The settings in effect for the current context."""
    return _active_settings.get()


def configure(settings: CalendarSettings) -> CalendarSettings:
    """Make ``settings`` the ambient configuration.  Returns the previous one."""
    previous = _active_settings.get()
    _active_settings.set(settings)
    if settings != previous:
        logger.info(
            "calendar_config_changed",
            extra={"previous": previous.as_dict(), "current": settings.as_dict()},
        )
    return previous


def set_accounting_year_type(value: AccountingYearType | str) -> None:
    """Set the ambient accounting-year type ("calendar" or "financial")."""
    configure(get_active_config().replace(accounting_year_type=value))


def set_calendar_system(value: CalendarSystem | str) -> None:
    """Set the ambient calendar system ("ad" or "bs")."""
    configure(get_active_config().replace(calendar_system=value))


def get_accounting_year_type() -> AccountingYearType:
    return get_active_config().accounting_year_type


def get_calendar_system() -> CalendarSystem:
    return get_active_config().calendar_system


def reset_config() -> None:
    """Restore the built-in defaults for the current context."""
    configure(_DEFAULT_SETTINGS)


@contextmanager
def using_config(**changes: Any) -> Iterator[CalendarSettings]:
    """
    Temporarily apply ``changes`` to the ambient settings.

    Usage:
        with using_config(accounting_year_type="financial"):
            quarter_end_date(2080, 1)
    """
    settings = get_active_config().replace(**changes)
    token = _active_settings.set(settings)
    try:
        yield settings
    finally:
        _active_settings.reset(token)


__all__ = [
    "CalendarSettings",
    "configure",
    "get_accounting_year_type",
    "get_active_config",
    "get_calendar_system",
    "load_settings",
    "load_yaml_file",
    "parse_settings",
    "reset_config",
    "set_accounting_year_type",
    "set_calendar_system",
    "using_config",
]
