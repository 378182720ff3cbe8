"""Logger setup for the WebAPI SDK."""

import itertools
import logging
import sys

LOGGER_NAME = "webapi_sdk"
LOG_FORMAT = "[webapi-sdk] %(levelname)s %(message)s"

_instance_ids = itertools.count(1)


def get_logger(
    logger: logging.Logger | None = None,
    level: int | str | None = None,
) -> logging.Logger:
    """Return the logger a client should write to.

    Without ``logger`` this is the package logger with a stderr handler
    attached once, at INFO. An explicit ``level`` then goes on a child of
    the package logger so it only affects the client asking for it.

    Args:
        logger: Caller-supplied logger; used as-is apart from ``level``.
        level: Optional level (int or name such as "debug").

    Returns:
        The configured logger.
    """
    if isinstance(level, str):
        level = level.upper()
    if logger is None:
        logger = _package_logger()
        if level is not None:
            logger = logger.getChild(f"client{next(_instance_ids)}")
    if level is not None:
        logger.setLevel(level)
    return logger


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        if logger.level == logging.NOTSET:
            logger.setLevel(logging.INFO)
    return logger
