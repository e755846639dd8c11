"""Shared fixtures for eventmail tests."""

import logging
import textwrap
from datetime import date

import pytest

ENV_VARS = (
    "LOG_LEVEL",
    "LOG_FORMAT",
    "EVENTMAIL_USER",
    "EVENTMAIL_PASSWORD",
    "XDG_CONFIG_HOME",
)

# 2024-06-03 is a Monday
MONDAY = date(2024, 6, 3)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep variables from the developer's shell out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config document and return its path."""

    def _write(content: str, name: str = "eventmail.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def event_file(tmp_path):
    """Write event lines to a data file and return its path."""

    def _write(*lines: str):
        path = tmp_path / "events.txt"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by configure_logging() during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
