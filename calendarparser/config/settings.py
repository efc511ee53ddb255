"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "CALENDARPARSER_"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    # Console Logging
    console_enabled: bool = Field(default=True, description="Enable console logging")
    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )

    # File Logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_level: str = Field(
        default="DEBUG",
        description="File log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    file_directory: Optional[str] = Field(
        default=None, description="Custom log directory (defaults to the working directory)"
    )
    file_name: str = Field(default="calendarparser.log", description="Log file name")
    max_log_files: int = Field(default=5, description="Number of rotated log files to keep")

    # Third-party Libraries
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class CalendarParserSettings(BaseSettings):
    """Application settings with environment variable and YAML support.

    Priority: explicit arguments > environment > YAML file > defaults.
    """

    _explicit_args: set = PrivateAttr(default_factory=set)
    _env_vars_set: set = PrivateAttr(default_factory=set)

    # Parser Configuration
    halt_on_parse_errors: bool = Field(
        default=False, description="Abort parsing on the first error instead of logging it"
    )
    event_class: Optional[str] = Field(
        default=None, description="Import path of the class used for VEVENT blocks"
    )

    # File Paths
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "calendarparser")
    config_file: Optional[Path] = Field(
        default=None, description="Explicit YAML configuration file"
    )

    # Logging Configuration
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    def __init__(self, **kwargs: Any) -> None:
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower()
            for key in os.environ
            if key.upper().startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set

        self._load_yaml_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find config file: explicit path, then project directory, then user config dir."""
        if self.config_file is not None:
            return self.config_file if self.config_file.exists() else None

        project_root = Path(__file__).parent.parent.parent
        project_config = project_root / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _is_overridden(self, setting: str) -> bool:
        return setting in self._explicit_args or setting in self._env_vars_set

    def _load_parser_config(self, config_data: dict) -> None:
        """Load parser configuration from YAML data."""
        if "parser" not in config_data:
            return

        parser_config = config_data["parser"] or {}
        for setting in ("halt_on_parse_errors", "event_class"):
            if setting in parser_config and not self._is_overridden(setting):
                setattr(self, setting, parser_config[setting])

    def _load_logging_config(self, config_data: dict) -> None:
        """Load logging configuration from YAML data, field by field."""
        if "logging" not in config_data:
            return
        # An explicit LoggingSettings or a whole CALENDARPARSER_LOGGING value wins
        if "logging" in self._explicit_args or "logging" in self._env_vars_set:
            return

        logging_config = config_data["logging"] or {}
        for setting in LoggingSettings.model_fields:
            if setting in logging_config and f"logging__{setting}" not in self._env_vars_set:
                setattr(self.logging, setting, logging_config[setting])

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logging.warning(f"Could not load YAML config from {config_file}: {e}")
            return

        if not isinstance(config_data, dict):
            return

        self._load_parser_config(config_data)
        self._load_logging_config(config_data)


# Global settings management
_settings_instance: Optional[CalendarParserSettings] = None


def get_settings() -> CalendarParserSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = CalendarParserSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
