"""Logging setup for the vta pipeline."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# HTTP client chatter from the vision API call is only useful when debugging.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "PIL")


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once; third-party loggers stay at WARNING unless DEBUG."""
    numeric = getattr(logging, level.upper())
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING)
