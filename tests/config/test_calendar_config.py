"""
Tests for calendar configuration: schema, YAML loader and ambient settings.

Covers:
- CalendarSettings defaults, normalization and validation
- YAML loading layered over the packaged defaults
- Ambient setters/getters, failed updates leaving settings untouched
- Scoped overrides and isolation across threads
- calendar_config_changed log records
"""

import threading

import pytest
import yaml

from bs_config import (
    configure,
    get_accounting_year_type,
    get_active_config,
    get_calendar_system,
    reset_config,
    set_accounting_year_type,
    set_calendar_system,
    using_config,
)
from bs_config.loader import DEFAULTS_FILE, load_settings, load_yaml_file, parse_settings
from bs_config.schema import CalendarSettings
from bs_kernel.domain.values import AccountingYearType, CalendarSystem
from bs_kernel.exceptions import InvalidConfigValueError


class TestCalendarSettings:
    """The frozen settings dataclass."""

    def test_defaults(self):
        settings = CalendarSettings()
        assert settings.accounting_year_type is AccountingYearType.CALENDAR
        assert settings.calendar_system is CalendarSystem.AD
        assert settings.date_format == "YYYY-MM-DD"
        assert settings.time_zone is None

    def test_strings_normalized_to_enums(self):
        settings = CalendarSettings(accounting_year_type="financial", calendar_system="bs")
        assert settings.accounting_year_type is AccountingYearType.FINANCIAL
        assert settings.calendar_system is CalendarSystem.BS

    def test_immutable(self):
        settings = CalendarSettings()
        with pytest.raises(AttributeError):
            settings.date_format = "DD/MM/YYYY"  # type: ignore[misc]

    def test_replace_validates(self):
        with pytest.raises(InvalidConfigValueError):
            CalendarSettings().replace(accounting_year_type="fiscal")

    def test_date_format_needs_all_tokens(self):
        with pytest.raises(InvalidConfigValueError):
            CalendarSettings(date_format="YYYY-MM")

    def test_unknown_time_zone(self):
        with pytest.raises(InvalidConfigValueError):
            CalendarSettings(time_zone="Mars/Olympus")

    def test_known_time_zone(self):
        assert CalendarSettings(time_zone="Asia/Kathmandu").time_zone == "Asia/Kathmandu"


class TestLoader:
    """YAML loading."""

    def test_packaged_defaults(self):
        assert load_settings() == CalendarSettings()

    def test_defaults_file_parses(self):
        data = load_yaml_file(DEFAULTS_FILE)
        assert data["calendar"]["accounting_year_type"] == "calendar"

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "calendar.yaml"
        path.write_text("calendar:\n  accounting_year_type: financial\n")

        settings = load_settings(path)
        assert settings.accounting_year_type is AccountingYearType.FINANCIAL
        assert settings.calendar_system is CalendarSystem.AD

    def test_top_level_keys_accepted(self):
        settings = parse_settings({"calendar_system": "bs", "date_format": "DD/MM/YYYY"})
        assert settings.calendar_system is CalendarSystem.BS
        assert settings.date_format == "DD/MM/YYYY"

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidConfigValueError) as exc_info:
            parse_settings({"calendar": {"year_type": "financial"}})

        assert exc_info.value.value == "year_type"

    def test_invalid_value_rejected(self):
        with pytest.raises(InvalidConfigValueError):
            parse_settings({"calendar": {"calendar_system": "ns"}})

    @pytest.mark.parametrize("data", [["a", "b"], "financial", 3])
    def test_non_mapping_rejected(self, data):
        with pytest.raises(InvalidConfigValueError) as exc_info:
            parse_settings(data)

        assert exc_info.value.setting == "settings file"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_file(path) == {}
        assert load_settings(path) == CalendarSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("calendar: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_settings(path)


class TestAmbientConfig:
    """Ambient setters and getters."""

    def test_defaults(self):
        assert get_accounting_year_type() is AccountingYearType.CALENDAR
        assert get_calendar_system() is CalendarSystem.AD

    def test_set_accounting_year_type(self):
        set_accounting_year_type("financial")
        assert get_accounting_year_type() is AccountingYearType.FINANCIAL

    def test_set_calendar_system(self):
        set_calendar_system(CalendarSystem.BS)
        assert get_calendar_system() is CalendarSystem.BS

    def test_invalid_value_leaves_settings_untouched(self):
        set_accounting_year_type("financial")
        with pytest.raises(InvalidConfigValueError):
            set_accounting_year_type("quarterly")

        assert get_accounting_year_type() is AccountingYearType.FINANCIAL

    def test_reset(self):
        set_calendar_system("bs")
        reset_config()
        assert get_active_config() == CalendarSettings()

    def test_configure_returns_previous(self):
        previous = configure(CalendarSettings(calendar_system="bs"))
        assert previous == CalendarSettings()

    def test_change_logged(self, captured_logs):
        set_accounting_year_type("financial")

        changes = [r for r in captured_logs() if r["message"] == "calendar_config_changed"]
        assert len(changes) == 1
        assert changes[0]["previous"]["accounting_year_type"] == "calendar"
        assert changes[0]["current"]["accounting_year_type"] == "financial"

    def test_no_log_when_unchanged(self, captured_logs):
        set_accounting_year_type("calendar")

        assert not any(
            r["message"] == "calendar_config_changed" for r in captured_logs()
        )


class TestScopedConfig:
    """using_config and context isolation."""

    def test_using_config_restores(self):
        with using_config(accounting_year_type="financial") as settings:
            assert settings.accounting_year_type is AccountingYearType.FINANCIAL
            assert get_accounting_year_type() is AccountingYearType.FINANCIAL
        assert get_accounting_year_type() is AccountingYearType.CALENDAR

    def test_using_config_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with using_config(calendar_system="bs"):
                raise RuntimeError("inside")
        assert get_calendar_system() is CalendarSystem.AD

    def test_other_thread_does_not_see_change(self):
        set_accounting_year_type("financial")
        seen = []

        thread = threading.Thread(target=lambda: seen.append(get_accounting_year_type()))
        thread.start()
        thread.join()

        assert seen == [AccountingYearType.CALENDAR]
        assert get_accounting_year_type() is AccountingYearType.FINANCIAL
