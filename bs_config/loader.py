"""
Configuration Loader (``bs_config.loader``).

Responsibility
--------------
Loads YAML settings files and parses them into the frozen
``bs_config.schema.CalendarSettings`` dataclass.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on the kernel value
types only; never on engines or services.

Invariants enforced
-------------------
* Unknown keys are rejected rather than ignored, so a misspelt setting
  cannot silently fall back to its default.
* Every parsed object is a validated, frozen ``CalendarSettings``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key or invalid value  -> ``InvalidConfigValueError``.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from bs_config.schema import CalendarSettings
from bs_kernel.exceptions import InvalidConfigValueError
from bs_kernel.logging_config import get_logger

logger = get_logger("config.loader")

DEFAULTS_FILE = Path(__file__).parent / "defaults.yaml"

_SETTING_NAMES = tuple(f.name for f in fields(CalendarSettings))


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Preconditions:
        - ``path`` must point to an existing, readable YAML file.
    Postconditions:
        - Returns the parsed document, ``{}`` if the YAML is empty.
          ``parse_settings`` rejects a document that is not a mapping.
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_settings(
    data: dict[str, Any],
    base: CalendarSettings | None = None,
) -> CalendarSettings:
    """
    Parse ``CalendarSettings`` from a dict.

    The settings may sit at the top level or under a ``calendar:`` key.
    Keys absent from ``data`` keep their value from ``base`` (or the
    dataclass defaults).

    Raises:
        InvalidConfigValueError: if ``data`` is not a mapping, or on an
            unknown key or an invalid value.
    """
    if not isinstance(data, dict):
        raise InvalidConfigValueError("settings file", data, ("mapping",))
    section = data.get("calendar", data)
    if not isinstance(section, dict):
        raise InvalidConfigValueError("calendar section", section, ("mapping",))

    unknown = sorted(set(section) - set(_SETTING_NAMES))
    if unknown:
        raise InvalidConfigValueError("setting", unknown[0], _SETTING_NAMES)

    settings = base or CalendarSettings()
    return settings.replace(**section)


def load_settings(path: Path | str | None = None) -> CalendarSettings:
    """
    Load settings from ``path``, layered over the packaged defaults.

    With no path, the packaged ``defaults.yaml`` alone is loaded.
    """
    settings = parse_settings(load_yaml_file(DEFAULTS_FILE))
    if path is not None:
        settings = parse_settings(load_yaml_file(Path(path)), base=settings)

    logger.debug(
        "calendar_settings_loaded",
        extra={"config_path": str(path) if path else str(DEFAULTS_FILE), **settings.as_dict()},
    )
    return settings
