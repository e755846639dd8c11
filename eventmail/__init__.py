"""eventmail: send templated announcements about the next event."""

__version__ = "0.1.0"
