"""Process-wide logging setup for the portal API and dashboard."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from energy_portal.utils.config import get_settings


_LOGGER_INITIALIZED = False

# Third-party loggers that report every outbound request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "urllib3")


def configure_logging(level: Optional[str] = None) -> None:
    """Install the shared stdout handler the first time a logger is requested.

    Outbound HTTP client loggers are held at WARNING unless the portal itself
    runs at DEBUG, since the proxy services already log each backend call.
    """

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    resolved_level = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    if resolved_level != "DEBUG":
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
