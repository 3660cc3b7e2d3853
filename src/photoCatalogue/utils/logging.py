"""Package-wide logger access."""

from __future__ import annotations

import logging

LOGGER_NAME = "photoCatalogue"

logger = logging.getLogger(LOGGER_NAME)


def get_logger() -> logging.Logger:
    """Return the shared photoCatalogue logger.

    The library never installs handlers; front-ends decide where records go.
    """

    return logger


__all__ = ["LOGGER_NAME", "get_logger", "logger"]
