"""
Tests for YAML configuration loading.
"""

import pendulum
import pytest

from duedate import config as config_module
from duedate.config import AppConfig, WorkingHoursConfig
from duedate.domain.models import US_HOLIDAYS


def _write(tmp_path, content: str):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults_match_default_policy(self):
        """Test an empty configuration yields the built-in calendar."""
        policy = AppConfig().to_policy()

        assert policy.start_hour == 9
        assert policy.end_hour == 17
        assert policy.working_weekdays == frozenset({0, 1, 2, 3, 4})
        assert policy.holidays == US_HOLIDAYS

    def test_load_from_yaml(self, tmp_path):
        """Test loading a full configuration file."""
        path = _write(
            tmp_path,
            "working_hours:\n"
            "  start_hour: 8\n"
            "  end_hour: 16\n"
            "working_days: [0, 1, 2, 3]\n"
            "holidays: ['12/24', '12/31']\n"
            "timezone: Europe/Berlin\n"
            "roll_forward_submit: true\n"
            "max_skip_days: 30\n",
        )

        config = AppConfig.load_from_yaml(path)
        policy = config.to_policy()

        assert policy.start_hour == 8
        assert policy.end_hour == 16
        assert policy.working_weekdays == frozenset({0, 1, 2, 3})
        assert policy.holidays == frozenset({"12/24", "12/31"})
        assert config.timezone == "Europe/Berlin"
        assert config.roll_forward_submit is True
        assert config.max_skip_days == 30

    def test_empty_file_uses_defaults(self, tmp_path):
        path = _write(tmp_path, "")

        assert AppConfig.load_from_yaml(path) == AppConfig()

    def test_missing_file_raises_error(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises_value_error(self, tmp_path):
        path = _write(tmp_path, "working_hours: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_non_mapping_root_raises_value_error(self, tmp_path):
        path = _write(tmp_path, "- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(path)

    def test_working_days_are_deduplicated(self):
        """Test duplicate weekdays are removed while preserving order."""
        config = AppConfig(working_days=[4, 0, 4, 2])

        assert config.working_days == [4, 0, 2]

    @pytest.mark.parametrize("days", [[], [0, 7], [-1]])
    def test_invalid_working_days(self, days):
        with pytest.raises(ValueError):
            AppConfig(working_days=days)

    @pytest.mark.parametrize("holiday", ["1/1", "02/30", "christmas"])
    def test_invalid_holidays(self, holiday):
        with pytest.raises(ValueError):
            AppConfig(holidays=[holiday])

    def test_invalid_working_hours(self):
        """Test the window must open before it closes and stay within a day."""
        with pytest.raises(ValueError, match="end_hour must be later"):
            WorkingHoursConfig(start_hour=17, end_hour=9)

        with pytest.raises(ValueError, match="between 0 and 24"):
            WorkingHoursConfig(start_hour=9, end_hour=25)

    def test_missing_file_message_mentions_defaults(self, tmp_path):
        """Test the missing-file error points at the built-in defaults."""
        with pytest.raises(FileNotFoundError, match="built-in defaults"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_timezone(self):
        """Test an unknown zone is rejected when the config is built."""
        with pytest.raises(ValueError, match="Invalid timezone 'Mars/Olympus'"):
            AppConfig(timezone="Mars/Olympus")

    def test_invalid_timezone_in_file(self, tmp_path):
        path = _write(tmp_path, "timezone: Mars/Olympus\n")

        with pytest.raises(ValueError, match="Invalid timezone"):
            AppConfig.load_from_yaml(path)

    def test_invalid_max_skip_days(self):
        with pytest.raises(ValueError):
            AppConfig(max_skip_days=0)

    def test_build_calculator(self):
        """Test the calculator carries the configured policy and flags."""
        config = AppConfig(roll_forward_submit=True, max_skip_days=10)

        calculator = config.build_calculator()

        assert calculator.policy == config.to_policy()
        assert calculator.roll_forward_submit is True
        assert calculator.max_skip_days == 10

    def test_build_calculator_override(self):
        config = AppConfig(roll_forward_submit=False)

        assert config.build_calculator(roll_forward_submit=True).roll_forward_submit is True
        assert config.build_calculator().roll_forward_submit is False

    def test_configured_calculator_computes_due_date(self, tmp_path):
        """Test a configured calendar without holidays drives the calculation."""
        path = _write(tmp_path, "holidays: []\n")
        calculator = AppConfig.load_from_yaml(path).build_calculator()

        due = calculator.calculate_due_date(
            pendulum.parse("2025-12-30 14:12:00", tz="UTC"),
            {"days": 1, "hours": 4, "minutes": 30},
        )

        assert due == pendulum.parse("2026-01-01 10:42:00", tz="UTC")


class TestLoad:
    """Tests for resolving explicit and default config files."""

    def test_explicit_path(self, tmp_path):
        path = _write(tmp_path, "timezone: America/New_York\n")

        assert AppConfig.load(path).timezone == "America/New_York"

    def test_explicit_missing_path_raises_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load(tmp_path / "missing.yaml")

    def test_missing_default_file_uses_defaults(self, tmp_path, monkeypatch):
        """Test a missing default config file falls back to built-in values."""
        monkeypatch.setattr(config_module, "get_default_config_path", lambda: tmp_path / "config.yaml")

        assert AppConfig.load() == AppConfig()

    def test_default_file_is_used(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "working_days: [0]\n")
        monkeypatch.setattr(config_module, "get_default_config_path", lambda: path)

        assert AppConfig.load().working_days == [0]

    def test_default_path_prefers_cwd(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "")
        monkeypatch.chdir(tmp_path)

        assert config_module.get_default_config_path() == path
