"""Logging setup for dependency check runs."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER_NAME = "dependency_check"
PROGRESS_HANDLER_NAME = "dependency_check.progress"


def configure_logging(*, quiet: bool = False) -> logging.Logger:
    """Route package log records to stdout as plain progress lines."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if existing.get_name() == PROGRESS_HANDLER_NAME:
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(PROGRESS_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.WARNING if quiet else logging.INFO)
    return package_logger
