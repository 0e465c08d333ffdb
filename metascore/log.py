"""Logging setup for the command line.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed by :func:`configure_logging`, which the CLI calls once
per invocation.
"""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Reduce noise from network libraries unless explicitly overridden.
_NOISY_LOGGERS = ("httpx", "httpcore")

_handler: Optional[logging.Handler] = None


def configure_logging(level: str | int = "WARNING") -> None:
    """Send ``metascore`` log records at *level* and above to stderr.

    Calling it again replaces the handler installed by the previous call.
    """
    global _handler

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("metascore")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
