"""
Clock -- Deterministic time abstraction and time-zone resolution.

Responsibility:
    Provides an injectable clock interface so that engine and service code
    never call ``datetime.now()`` or ``date.today()`` directly, and resolves
    which IANA zone "today" is evaluated in.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock
    and ``resolve_time_zone``, the sanctioned boundaries for the host clock
    and host zone).

Failure modes:
    - None raised.  An unknown ``TZ`` value or an unreadable host zone is
      logged and skipped; resolution then falls back to Asia/Kathmandu.
"""

import os
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bs_kernel.logging_config import get_logger

logger = get_logger("domain.clock")

FALLBACK_TIME_ZONE = "Asia/Kathmandu"

_LOCALTIME = Path("/etc/localtime")


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        All services that need the current time receive a Clock instance
        via constructor injection.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
        - ``now_utc()`` returns a UTC-normalized ``datetime``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    @abstractmethod
    def now_utc(self) -> datetime:
        """Get the current UTC time."""
        ...

    def today(self, time_zone: str) -> date:
        """Calendar date of the current instant in ``time_zone``."""
        return self.now_utc().astimezone(ZoneInfo(time_zone)).date()


class SystemClock(Clock):
    """Production clock that returns actual system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        - ``now()`` returns the same value on repeated calls until
          ``advance()`` or ``set_time()`` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(
            2024, 11, 7, 6, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def now_utc(self) -> datetime:
        return self.now().astimezone(timezone.utc)

    def set_time(self, time: datetime) -> None:
        """Set the clock to a specific time."""
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> None:
        """Advance the clock by the specified seconds."""
        self._advance_seconds += seconds


def _host_time_zone() -> str | None:
    """IANA name of the host zone, read from the /etc/localtime link."""
    try:
        target = _LOCALTIME.resolve(strict=True)
    except OSError:
        return None
    parts = target.parts
    if "zoneinfo" not in parts:
        return None
    name = "/".join(parts[parts.index("zoneinfo") + 1:])
    return name or None


def is_known_zone(name: str) -> bool:
    """True if ``zoneinfo`` can load ``name``."""
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def resolve_time_zone() -> str:
    """
    Zone in which "today" is evaluated.

    Resolution order: the ``TZ`` environment variable, the host zone, then
    Asia/Kathmandu.  Candidates that ``zoneinfo`` cannot load are skipped.
    """
    env_tz = os.environ.get("TZ", "").lstrip(":")
    if env_tz:
        if is_known_zone(env_tz):
            return env_tz
        logger.warning("time_zone_env_unknown", extra={"tz_value": env_tz})

    host_tz = _host_time_zone()
    if host_tz and is_known_zone(host_tz):
        return host_tz

    return FALLBACK_TIME_ZONE
