"""Event file lookup by date.

Each line of the event file is searched with the profile's format, a
regular expression whose named groups become template values. The first
line whose 'date' group equals the target date is the event.
"""

import re
from pathlib import Path
from typing import Dict, Optional, Union

from eventmail.logging import get_logger

from .exceptions import DataFileError, DateCaptureMissingError, NoMatchError, PatternError

logger = get_logger(__name__, component="preparation")

DATE_GROUP = "date"


def compile_format(pattern: str) -> "re.Pattern[str]":
    """Compile the record format.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Format - {e}") from e


def line_captures(regex: "re.Pattern[str]", line: str) -> Optional[Dict[str, str]]:
    """Named captures of the first match in line, or None if it does not match.

    Groups that did not take part in the match are left out.
    """
    match = regex.search(line)
    if match is None:
        return None
    return {name: value for name, value in match.groupdict().items() if value is not None}


def strip_line_ending(line: str) -> str:
    """Drop one trailing '\\n' or '\\r\\n'; a lone '\\r' is line content."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def find_record(path: Union[str, Path], pattern: str, expected_date: str) -> Dict[str, str]:
    """Return the named captures of the first line whose 'date' equals expected_date.

    Lines are compared by exact string equality on the 'date' capture. A
    line that matches the format without producing a 'date' capture means
    the format is wrong for this purpose, so the scan stops there.

    Args:
        path: Event file to scan
        pattern: Regular expression with a named 'date' group
        expected_date: Date string the 'date' capture must equal

    Returns:
        All named captures of the matching line

    Raises:
        PatternError: If the pattern does not compile
        DataFileError: If the file can not be opened or read
        DateCaptureMissingError: If a matching line has no 'date' capture
        NoMatchError: If no line carries the expected date
    """
    regex = compile_format(pattern)
    filename = Path(path).expanduser()

    try:
        with open(filename, "r", encoding="utf-8", newline="\n") as f:
            for line_number, line in enumerate(f, 1):
                captures = line_captures(regex, strip_line_ending(line))
                if captures is None:
                    continue

                record_date = captures.get(DATE_GROUP)
                if record_date is None:
                    logger.warning(
                        "Date not a captured field in format",
                        extra={"event": "records.date_capture_missing", "line": line_number},
                    )
                    raise DateCaptureMissingError(
                        f"Date not a captured field in format (line {line_number} of {filename})"
                    )

                if record_date == expected_date:
                    logger.info(
                        f"Matched event for {expected_date}",
                        extra={
                            "event": "records.matched",
                            "line": line_number,
                            "fields": sorted(captures),
                        },
                    )
                    return captures
    except OSError as e:
        raise DataFileError(f"File {filename} -- {e}") from e
    except UnicodeDecodeError as e:
        raise DataFileError(f"Read line from {filename} -- {e}") from e

    raise NoMatchError(f"No line in data file matched expected date {expected_date}")
