"""Engine and client loggers writing to the console and a log file."""

from __future__ import annotations

import logging
import os
import sys

CORE_LOGGER_NAME = "Emerald"
CLIENT_LOGGER_NAME = "APP"

_CONSOLE_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
_FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_TIME_FORMAT = "%H:%M:%S"


def core_logger() -> logging.Logger:
    """Logger used by the engine itself."""
    return logging.getLogger(CORE_LOGGER_NAME)


def client_logger() -> logging.Logger:
    """Logger for applications built on the engine."""
    return logging.getLogger(CLIENT_LOGGER_NAME)


def init_logging(log_file: str | os.PathLike[str] = "Emerald.log") -> None:
    """Send both loggers to standard output and to ``log_file``, truncating it.

    Calling it again replaces the handlers set up by an earlier call.
    """
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, _TIME_FORMAT))
    file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _TIME_FORMAT))

    for logger in (core_logger(), client_logger()):
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        logger.addHandler(console)
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False