from __future__ import annotations

import logging
import sys

APP_LOGGER = "notegraph"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level.

    Logs go to stderr so a JSON report on stdout stays machine-readable.
    """
    logger = logging.getLogger(APP_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler):
                h.setStream(sys.stderr)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    logger.addHandler(handler)
    return logger
