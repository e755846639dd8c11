"""Message text preparation: dates, event records and template expansion."""

from .dates import Weekday, next_weekday_date, parse_weekday
from .exceptions import (
    DataFileError,
    DateCaptureMissingError,
    MissingRequiredFieldError,
    NoMatchError,
    PatternError,
    PreparationError,
    TemplateExpansionError,
    UnparsableWeekdayError,
)
from .preparer import PreparedText, prepare_text
from .records import find_record
from .templates import TemplateExpander, expand_template

__all__ = [
    # Orchestration
    "prepare_text",
    "PreparedText",
    # Components
    "Weekday",
    "parse_weekday",
    "next_weekday_date",
    "find_record",
    "TemplateExpander",
    "expand_template",
    # Exceptions
    "PreparationError",
    "MissingRequiredFieldError",
    "UnparsableWeekdayError",
    "PatternError",
    "DataFileError",
    "NoMatchError",
    "DateCaptureMissingError",
    "TemplateExpansionError",
]
