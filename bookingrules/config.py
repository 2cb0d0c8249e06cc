"""
Configuration management using Pydantic Settings.
"""

from pathlib import Path
from typing import List

import pendulum
import yaml
from pendulum import Date
from pydantic import BaseModel, Field, field_validator


class DefaultsConfig(BaseModel):
    """Default settings for slot generation."""
    interval_minutes: int = 30
    service_duration_minutes: int = 30

    @field_validator("interval_minutes", "service_duration_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure minute values are positive."""
        if value <= 0:
            raise ValueError("value must be greater than zero")
        return value


class ServiceConfig(BaseModel):
    """A bookable service and its duration."""
    name: str  # Used as alias on the command line
    duration_minutes: int

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure service duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "America/Sao_Paulo"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    services: List[ServiceConfig] = Field(default_factory=list)
    schedule_file: Path = Path("schedule.yaml")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("services")
    @classmethod
    def validate_services(cls, value: List[ServiceConfig]) -> List[ServiceConfig]:
        """Ensure service names are unique."""
        seen_names: set[str] = set()
        for service in value:
            name_key = service.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate service name detected: {service.name}")
            seen_names.add(name_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``schedule_file`` is resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if not config.schedule_file.is_absolute():
            config.schedule_file = config_path.parent / config.schedule_file

        return config

    def find_service_by_name(self, name: str) -> ServiceConfig | None:
        """Find a service by its name (alias)."""
        for service in self.services:
            if service.name.lower() == name.lower():
                return service
        return None

    def resolve_duration(self, service: str | None = None, duration: int | None = None) -> int:
        """
        Resolve the booking duration in minutes.

        An explicit duration wins, then the named service, then the default.

        Raises:
            ValueError: If the service is unknown or the duration is not positive
        """
        if duration is not None:
            if duration <= 0:
                raise ValueError("Duration must be greater than zero.")
            return duration

        if service:
            found = self.find_service_by_name(service)
            if found is None:
                known = ", ".join(s.name for s in self.services) or "none configured"
                raise ValueError(f"Unknown service: '{service}'. Known services: {known}")
            return found.duration_minutes

        return self.defaults.service_duration_minutes

    def today(self) -> Date:
        """Return today's civil date in the configured timezone."""
        return pendulum.today(self.timezone).date()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
