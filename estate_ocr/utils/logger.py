"""Centralized logging setup for the real-estate OCR system.

Every module logs through ``get_logger(__name__)``; the CLI configures
the root logger once at startup.
"""

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", stream=None) -> None:
    """Configure the root logger with a standard format.

    Does nothing when the root logger already has handlers.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
        stream: Output stream for log records. Defaults to stdout.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance."""
    return logging.getLogger(name)
