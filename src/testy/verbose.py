"""Debug logging configuration for facade output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


def setup_logger(debug_file: Path, verbose: bool = False, logger_name: str = "testy") -> logging.Logger:
    """Send facade failures, log lines and warnings to ``debug_file`` (and stderr when verbose).

    Calling it again replaces the handlers of ``logger_name``.
    """
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    debug_file.parent.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [logging.FileHandler(debug_file, mode="a")]
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
