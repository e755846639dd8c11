"""Configuration management for eventmail."""

from .models import LogFormat, LogLevel, Profile, TextMode
from .exceptions import ConfigurationError
from .environment import EnvironmentConfig, load_environment_config
from .loader import find_config_file, load_profiles, parse_profiles

__all__ = [
    # Loader functions
    "load_profiles",
    "parse_profiles",
    "find_config_file",
    "load_environment_config",
    # Configuration models
    "Profile",
    "EnvironmentConfig",
    # Enums
    "TextMode",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
