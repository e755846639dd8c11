"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check a raw profile document for likely mistakes.

    Args:
        config_dict: Raw configuration dictionary (profile name -> fields)

    Returns:
        List of warning messages
    """
    warning_messages = []

    profiles = {
        name: fields for name, fields in config_dict.items() if isinstance(fields, dict)
    }

    if profiles and not any("doc" in fields for fields in profiles.values()):
        warning_messages.append(
            "No profile has a 'doc' field; none can be selected or listed"
        )

    for name, fields in profiles.items():
        parent = fields.get("inherit")
        if isinstance(parent, str) and parent.strip():
            if parent.strip() == name:
                warning_messages.append(f"Profile '{name}' inherits from itself")
            elif parent.strip() not in profiles:
                warning_messages.append(
                    f"Profile '{name}' inherits from undefined profile '{parent.strip()}'"
                )

        if "event_file" in fields and "format" not in fields and "inherit" not in fields:
            warning_messages.append(
                f"Profile '{name}' sets event_file without a format"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
