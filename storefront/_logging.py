"""
Logging setup for the storefront package.
"""

from __future__ import annotations

import logging
import sys
from storefront.config import LogFormat, PricingPolicy

PACKAGE_LOGGER = "storefront"

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"module": "%(name)s", "message": "%(message)s"}'
)


def setup_logging(
    level: str = "INFO",
    fmt: LogFormat = LogFormat.TEXT,
    file: str | None = None,
) -> logging.Logger:
    """
    Configure the storefront logger tree once.

    Replaces handlers from a previous call and stops propagation to root,
    so calling it twice never duplicates lines.
    """
    handler: logging.Handler = logging.FileHandler(file) if file else logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(JSON_FORMAT if fmt is LogFormat.JSON else TEXT_FORMAT)
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    for old_handler in logger.handlers[:]:
        old_handler.close()
        logger.removeHandler(old_handler)

    logger.addHandler(handler)
    logger.propagate = False
    return logger


def setup_logging_from(policy: PricingPolicy) -> logging.Logger:
    return setup_logging(policy.log_level, policy.log_format, policy.log_file)


__all__ = ("setup_logging", "setup_logging_from", "PACKAGE_LOGGER")
