"""Logger helpers for eventmail.

Modules log through get_logger(__name__, component="...") and pass
structured fields with extra={"event": "..."}. How those fields are
written is decided by configure_logging() in eventmail.logging.config.
"""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """Tags every record with the subsystem (config, preparation, ...) that emitted it."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {"component": self.extra["component"], **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Module logger, wrapped so its records carry component when one is given."""
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger
