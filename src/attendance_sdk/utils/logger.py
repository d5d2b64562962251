"""
Logging helpers

The SDK only emits records through module loggers under the
``attendance_sdk`` namespace; nothing is printed. Applications that want
to see recoverable events (token refresh, rate-limit backoff) call
``configure_logging``.
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "attendance_sdk"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the SDK namespace"""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    debug: bool = False,
    log_format: str = DEFAULT_LOG_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the SDK logger

    Calling it again replaces the handler installed by a previous call
    instead of stacking a second one.

    Args:
        debug: Log at DEBUG instead of WARNING
        log_format: Format string for log records
        stream: Output stream, stderr by default

    Returns:
        The configured SDK logger
    """
    sdk_logger = logging.getLogger(ROOT_LOGGER_NAME)
    sdk_logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    for handler in sdk_logger.handlers[:]:
        if getattr(handler, "_attendance_sdk_handler", False):
            sdk_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(log_format))
    handler._attendance_sdk_handler = True  # type: ignore[attr-defined]
    sdk_logger.addHandler(handler)

    return sdk_logger
