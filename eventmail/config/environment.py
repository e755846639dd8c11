"""Environment variable loading and validation."""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel

PROGRAM_NAME = "eventmail"


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        config_home: Optional[Path] = None,
    ):
        self.log_level = log_level
        self.log_format = log_format or LogFormat.KEY_VALUE.value
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.config_home = config_home or Path.home() / ".config"

    @property
    def config_dir(self) -> Path:
        """Directory holding the default eventmail configuration."""
        return self.config_home / PROGRAM_NAME

    @property
    def default_config_file(self) -> Path:
        """Default configuration file path, e.g. ~/.config/eventmail/eventmail.yaml."""
        return self.config_dir / f"{PROGRAM_NAME}.yaml"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_FORMAT: Log format (key-value or json)
    - EVENTMAIL_USER: SMTP user used when the profile sets none
    - EVENTMAIL_PASSWORD: SMTP password used when the profile sets none
    - XDG_CONFIG_HOME: Base directory for the default configuration file

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable holds an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")
    smtp_user = os.getenv("EVENTMAIL_USER")
    smtp_password = os.getenv("EVENTMAIL_PASSWORD")
    config_home = os.getenv("XDG_CONFIG_HOME")

    if log_level:
        valid_levels = [level.value for level in LogLevel]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )
        else:
            log_level = log_level.upper()

    if log_format:
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format not in valid_formats:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    # XDG base directory rules: relative paths are invalid and must be ignored
    config_home_path = None
    if config_home and Path(config_home).is_absolute():
        config_home_path = Path(config_home)

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            hint="Fix or unset these variables in your shell or .env file",
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        smtp_user=smtp_user,
        smtp_password=smtp_password,
        config_home=config_home_path,
    )
