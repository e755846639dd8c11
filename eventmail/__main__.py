"""Allow running eventmail with ``python -m eventmail``."""

from eventmail.main import run

run()
