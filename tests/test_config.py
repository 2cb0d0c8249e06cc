"""
Tests for configuration loading.
"""

from pathlib import Path

import pendulum
import pytest
from pydantic import ValidationError

from bookingrules.config import AppConfig, DefaultsConfig


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "America/Sao_Paulo"
        assert config.defaults.interval_minutes == 30
        assert config.defaults.service_duration_minutes == 30
        assert config.services == []

    def test_load_from_yaml_resolves_schedule_file(self, tmp_path):
        path = _write(
            tmp_path,
            "timezone: Europe/Berlin\n"
            "defaults: {interval_minutes: 15, service_duration_minutes: 45}\n"
            "services:\n  - {name: Haircut, duration_minutes: 30}\n"
            "schedule_file: data/schedule.yaml\n",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "Europe/Berlin"
        assert config.defaults.interval_minutes == 15
        assert config.schedule_file == tmp_path / "data" / "schedule.yaml"

    def test_absolute_schedule_file_is_kept(self, tmp_path):
        schedule = tmp_path / "elsewhere.yaml"
        path = _write(tmp_path, f"schedule_file: {schedule}\n")

        assert AppConfig.load_from_yaml(path).schedule_file == schedule

    def test_missing_file_raises_error(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises_error(self, tmp_path):
        path = _write(tmp_path, "services: [broken\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_non_mapping_root_raises_error(self, tmp_path):
        path = _write(tmp_path, "- a\n- b\n")

        with pytest.raises(ValueError, match="mapping at the root level"):
            AppConfig.load_from_yaml(path)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = _write(tmp_path, "")

        assert AppConfig.load_from_yaml(path).defaults == DefaultsConfig()

    def test_unknown_timezone_raises_error(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_duplicate_services_raise_error(self):
        with pytest.raises(ValidationError, match="Duplicate service name"):
            AppConfig(
                services=[
                    {"name": "haircut", "duration_minutes": 30},
                    {"name": "Haircut", "duration_minutes": 45},
                ]
            )

    def test_non_positive_durations_raise_error(self):
        with pytest.raises(ValidationError):
            DefaultsConfig(interval_minutes=0)
        with pytest.raises(ValidationError):
            AppConfig(services=[{"name": "x", "duration_minutes": -5}])

    def test_today_uses_configured_timezone(self):
        config = AppConfig(timezone="Pacific/Kiritimati")

        assert config.today() == pendulum.today("Pacific/Kiritimati").date()


class TestResolveDuration:
    """Tests for duration resolution."""

    config = AppConfig(
        defaults={"service_duration_minutes": 20},
        services=[{"name": "Coloring", "duration_minutes": 90}],
    )

    def test_explicit_duration_wins(self):
        assert self.config.resolve_duration("coloring", 45) == 45

    def test_named_service(self):
        assert self.config.resolve_duration("COLORING") == 90

    def test_default_duration(self):
        assert self.config.resolve_duration() == 20

    def test_unknown_service_raises_error(self):
        with pytest.raises(ValueError, match="Unknown service: 'massage'"):
            self.config.resolve_duration("massage")

    def test_non_positive_duration_raises_error(self):
        with pytest.raises(ValueError, match="Duration must be greater than zero"):
            self.config.resolve_duration(duration=0)
