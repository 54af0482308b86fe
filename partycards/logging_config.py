"""
Logging setup for the partycards package logger.
"""

from __future__ import annotations
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configure the `partycards` logger with a single stream handler.

    Safe to call more than once; existing handlers are replaced.
    """
    pkg_logger = logging.getLogger("partycards")
    pkg_logger.setLevel(level)
    pkg_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger.addHandler(handler)

    pkg_logger.propagate = False
    return pkg_logger
