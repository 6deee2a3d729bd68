"""Logging configuration helpers for the quiz service."""

import logging
from logging import Logger

from quizdesk.helpers.Config import get_log_level


def configure_logging() -> Logger:
    """Configure basic logging for the service and return the package logger."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("quizdesk")
