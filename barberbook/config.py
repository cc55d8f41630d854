"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.availability import DEFAULT_HORIZON_DAYS, SLOT_INTERVAL_MINUTES


class BookingDefaults(BaseModel):
    """Default settings for availability computation."""
    slot_interval_minutes: int = SLOT_INTERVAL_MINUTES
    horizon_days: int = DEFAULT_HORIZON_DAYS

    @field_validator("slot_interval_minutes", "horizon_days")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure intervals and horizons are positive."""
        if value <= 0:
            raise ValueError(f"Value must be greater than zero, got {value}")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "America/Sao_Paulo"
    catalog_path: Optional[Path] = None
    booking: BookingDefaults = Field(default_factory=BookingDefaults)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    def today(self) -> pendulum.Date:
        """Current date in the configured timezone."""
        return pendulum.today(self.timezone).date()

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

        # Relative catalog paths are resolved against the config file
        if config.catalog_path is not None and not config.catalog_path.is_absolute():
            config = config.model_copy(
                update={"catalog_path": config_path.parent / config.catalog_path}
            )
        return config


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
