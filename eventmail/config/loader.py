"""Configuration loader for eventmail."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig
from .exceptions import ConfigurationError
from .models import Profile
from .validators import check_for_warnings, emit_warnings


def load_profiles(
    config_path: Optional[Path] = None,
    env_config: Optional[EnvironmentConfig] = None,
) -> Dict[str, Profile]:
    """
    Load and validate the profile document.

    The file is the explicit config_path when given, otherwise
    eventmail.yaml in the eventmail configuration directory.

    Args:
        config_path: Optional path to the configuration file
        env_config: Environment configuration used to find the default file

    Returns:
        Profiles keyed by name, in file order

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_file = find_config_file(config_path, env_config or EnvironmentConfig())
    config_dict = _read_yaml(config_file)

    if not config_dict:
        raise ConfigurationError(
            f"Configuration file {config_file} is empty",
            hint="Add at least one profile to your config file",
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file {config_file} has an invalid structure",
            errors=[f"Expected a mapping of profile names, got {type(config_dict).__name__}"],
            hint="Write each profile as a top-level key holding its fields",
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    return parse_profiles(config_dict, config_file)


def parse_profiles(config_dict: Dict[Any, Any], source: Path) -> Dict[str, Profile]:
    """
    Validate every profile in a raw document.

    Errors from all profiles are collected and reported together.

    Raises:
        ConfigurationError: If any profile fails validation
    """
    profiles: Dict[str, Profile] = {}
    errors: List[str] = []

    for raw_name, fields in config_dict.items():
        name = str(raw_name)
        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            errors.append(f"Profile '{name}' must be a mapping of fields")
            continue

        try:
            profiles[name] = Profile.model_validate(fields)
        except ValidationError as e:
            errors.extend(_format_validation_errors(name, e))

    if errors:
        raise ConfigurationError(
            f"Config file {source} has an invalid structure",
            errors=errors,
            hint="Check field names and types (port is a number, to is a list of addresses)",
        )

    return profiles


def find_config_file(
    config_path: Optional[Path], env_config: EnvironmentConfig
) -> Path:
    """
    Resolve the configuration file location.

    Raises:
        ConfigurationError: If the file does not exist
    """
    if config_path:
        candidate = Path(config_path).expanduser()
        if not candidate.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {candidate}",
                hint="Check the path passed to --config",
            )
        return candidate

    candidate = env_config.default_config_file
    if not candidate.exists():
        raise ConfigurationError(
            "Configuration file not found",
            errors=[f"Tried: {candidate}"],
            hint=f"Create {candidate} or pass --config",
        )
    return candidate


def _read_yaml(config_file: Path) -> Any:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            hint="Check the YAML syntax; indent with spaces, not tabs",
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Could not read config file '{config_file}': {e}",
            hint="Check the file permissions and that it is UTF-8 text",
        ) from e


def _format_validation_errors(profile_name: str, error: ValidationError) -> List[str]:
    """Turn pydantic errors into one readable line each."""
    messages = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"]) or "(profile)"
        error_type = item["type"]

        if error_type == "extra_forbidden":
            messages.append(f"Profile '{profile_name}': unknown field '{field_path}'")
        elif error_type in ("string_type", "int_type", "int_parsing", "list_type"):
            messages.append(
                f"Profile '{profile_name}': invalid type for '{field_path}', "
                f"got {item.get('input')!r}"
            )
        else:
            messages.append(f"Profile '{profile_name}': {field_path}: {item['msg']}")
    return messages
