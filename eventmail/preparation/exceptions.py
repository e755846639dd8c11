"""Exceptions raised while preparing the message text.

Every one of these is fatal: the command reports it and exits.
"""


class PreparationError(Exception):
    """Base exception for text preparation errors."""

    pass


class MissingRequiredFieldError(PreparationError):
    """Raised when a profile field needed at this step is not set."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(message)


class UnparsableWeekdayError(PreparationError):
    """Raised when date_spec does not name a weekday."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"date_spec not a weekday (E.g. 'Monday' or 'Mon'). date_spec = {value!r}"
        )


class PatternError(PreparationError):
    """Raised when the record format fails to compile as a regular expression."""

    pass


class DataFileError(PreparationError):
    """Raised when the event file can not be opened or read."""

    pass


class NoMatchError(PreparationError):
    """Raised when no line of the event file carries the expected date."""

    pass


class DateCaptureMissingError(NoMatchError):
    """Raised when a line matches the format but yields no 'date' capture."""

    pass


class TemplateExpansionError(PreparationError):
    """Raised when template substitution itself fails (malformed template)."""

    pass
