"""Logging setup for the bakery package."""

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger exactly once."""

    logger = logging.getLogger("bakery")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if getattr(logger, "_configured_by_app", False):
        return logger

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    setattr(logger, "_configured_by_app", True)
    return logger
