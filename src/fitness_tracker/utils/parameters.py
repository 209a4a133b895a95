"""
Configuration and parameter loading using Pydantic.

This module provides centralized configuration management for the entire application.
All parameters are loaded from YAML and validated using Pydantic models.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fitness_tracker.utils.exceptions import ConfigurationError


class StorageConfig(BaseModel):
    """Entry store configuration."""

    dir: str = "data"
    key: str = "ft_entries_v2"
    legacy_key: str = "ft_entries_v1"


class TrackerConfig(BaseModel):
    """Tracker behaviour configuration."""

    timezone: str = "UTC"
    default_window: str = "all"
    default_metrics: list[str] = Field(default_factory=lambda: ["weight"])


class ChartConfig(BaseModel):
    """Chart layout and styling configuration."""

    width: int = Field(1000, gt=0)
    height_ratio: float = Field(0.52, gt=0)
    device_pixel_ratio: float = Field(1.0, gt=0)

    pad_left: float = 44
    pad_right: float = 14
    pad_top: float = 14
    pad_bottom: float = 32

    grid_lines: int = Field(5, ge=1)
    max_ticks: int = Field(6, ge=2)
    tick_baseline_offset: float = 10
    legend_baseline: float = 18
    font_size: int = 12

    primary_line_width: float = 2.6
    secondary_line_width: float = 2.0
    primary_marker_radius: float = 3.2
    secondary_marker_radius: float = 2.8

    background: str = "#0a0e1a"
    grid_color: str = "#ffffff14"
    tick_color: str = "#ffffffa6"
    legend_text_color: str = "#ffffffd9"
    border_color: str = "#ffffff24"
    metric_colors: dict[str, str] = Field(default_factory=dict)


class ExportConfig(BaseModel):
    """Export output configuration."""

    filename: str = "fitness-tracker-export.json"
    indent: int = 2


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    console: bool = True


class AppConfig(BaseSettings):
    """Main application configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_prefix="FT_", case_sensitive=False)


class ParameterLoader:
    """
    Centralized parameter loader for the application.

    Loads and validates configuration from YAML files using Pydantic models.
    Provides type-safe access to all configuration parameters.
    """

    def __init__(self, config_path: str = "config/config.yaml") -> None:
        """
        Initialize parameter loader.

        Args:
            config_path: Path to the YAML configuration file.

        Raises:
            ConfigurationError: If configuration file cannot be loaded or is invalid.
        """
        self.config_path = Path(config_path)
        self.config: AppConfig
        self._load_config()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file.

        Raises:
            ConfigurationError: If configuration file cannot be loaded or is invalid.
        """
        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_dict = yaml.safe_load(f) or {}

            if not isinstance(config_dict, dict):
                raise ConfigurationError("Configuration root must be a mapping")

            self.config = AppConfig(**config_dict)

        except ConfigurationError:
            raise
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML configuration: {e}") from e
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def get_storage_config(self) -> StorageConfig:
        """Get entry store configuration."""
        return self.config.storage

    def get_tracker_config(self) -> TrackerConfig:
        """Get tracker configuration."""
        return self.config.tracker

    def get_chart_config(self) -> ChartConfig:
        """Get chart configuration."""
        return self.config.chart

    def get_export_config(self) -> ExportConfig:
        """Get export configuration."""
        return self.config.export

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return self.config.logging

    def get_raw_config(self) -> dict[str, Any]:
        """
        Get raw configuration dictionary.

        Returns:
            Dictionary representation of the configuration.
        """
        return self.config.model_dump()
