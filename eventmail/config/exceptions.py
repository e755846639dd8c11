"""Errors raised while reading the eventmail configuration."""

from typing import Iterable, Optional


class ConfigurationError(Exception):
    """The configuration file or the environment can not be used.

    errors lists every problem found, so a single run reports all broken
    profiles at once; hint tells the user what to change.
    """

    def __init__(self, message: str, errors: Iterable[str] = (), hint: Optional[str] = None):
        self.message = message
        self.errors = list(errors)
        self.hint = hint

        lines = [message]
        lines.extend(f"  - {error}" for error in self.errors)
        if hint:
            lines.append(f"Hint: {hint}")
        super().__init__("\n".join(lines))
