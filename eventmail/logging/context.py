"""Active profile name for log records.

main() prepares and delivers the message inside profile_scope(name), so
every record emitted on the way names the profile it belongs to.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_active_profile: ContextVar[Optional[str]] = ContextVar("eventmail_profile", default=None)


def active_profile() -> Optional[str]:
    return _active_profile.get()


@contextmanager
def profile_scope(name: str) -> Iterator[None]:
    token = _active_profile.set(name)
    try:
        yield
    finally:
        _active_profile.reset(token)
