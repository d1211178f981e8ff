"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.due_date_calculator import DueDateCalculator
from .domain.exceptions import CalendarPolicyError
from .domain.models import US_HOLIDAYS, WEEKDAYS, CalendarPolicy, validate_holiday


class WorkingHoursConfig(BaseModel):
    """Daily working window."""
    start_hour: int = 9
    end_hour: int = 17

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 24."""
        if not 0 <= v <= 24:
            raise ValueError(f"Hour must be between 0 and 24, got {v}")
        return v

    @model_validator(mode="after")
    def validate_hours_order(self) -> "WorkingHoursConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    working_hours: WorkingHoursConfig = Field(default_factory=WorkingHoursConfig)
    working_days: List[int] = Field(default_factory=lambda: sorted(WEEKDAYS))  # Monday to Friday
    holidays: List[str] = Field(default_factory=lambda: sorted(US_HOLIDAYS))
    timezone: str = "UTC"
    roll_forward_submit: bool = False
    max_skip_days: int = 366

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"working_days must be between 0 and 6, got {invalid_days}")
        if not value:
            raise ValueError("working_days must contain at least one weekday")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @field_validator("holidays")
    @classmethod
    def validate_holidays(cls, value: List[str]) -> List[str]:
        """Ensure holidays are MM/DD strings for real days."""
        for holiday in value:
            try:
                validate_holiday(holiday)
            except CalendarPolicyError as exc:
                raise ValueError(str(exc)) from exc
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA identifier."""
        try:
            pendulum.timezone(value)
        except ValueError as exc:
            raise ValueError(f"Invalid timezone '{value}'") from exc
        return value

    @field_validator("max_skip_days")
    @classmethod
    def validate_max_skip_days(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_skip_days must be greater than zero")
        return value

    def to_policy(self) -> CalendarPolicy:
        """Build the calendar policy described by this configuration."""
        return CalendarPolicy(
            start_hour=self.working_hours.start_hour,
            end_hour=self.working_hours.end_hour,
            working_weekdays=frozenset(self.working_days),
            holidays=frozenset(self.holidays),
        )

    def build_calculator(self, roll_forward_submit: Optional[bool] = None) -> DueDateCalculator:
        """
        Build a calculator for this configuration.

        Args:
            roll_forward_submit: Overrides the configured value when given
        """
        if roll_forward_submit is None:
            roll_forward_submit = self.roll_forward_submit
        return DueDateCalculator(
            policy=self.to_policy(),
            roll_forward_submit=roll_forward_submit,
            max_skip_days=self.max_skip_days,
        )

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

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
                f"Omit --config to use the built-in defaults.\n"
                f"See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """
        Load an explicit config file, or the default one if it exists.

        Without an explicit path a missing default file yields the built-in
        defaults.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of duedate/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
