"""Application logging helpers."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

from platformdirs import user_log_dir

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
LOGGER_NAME = "lazybranch"
DEFAULT_LOG_PATH = Path(user_log_dir(LOGGER_NAME, appauthor=False)) / "lazybranch.log"
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def configure_logging(
    level: str = "WARNING",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
    console: bool = True,
) -> py_logging.Logger:
    """Configure the package logger.

    ``console=False`` drops the stderr handler; the interactive picker uses
    that while it owns the terminal so log lines cannot corrupt the frame.
    """
    resolved = LOG_LEVELS.get(level.upper(), py_logging.WARNING)

    logger = py_logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    formatter = py_logging.Formatter(_FORMAT)

    if console:
        handler = py_logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(resolved)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    file_error: OSError | None = None
    if log_file:
        log_path = Path(log_file).expanduser()
        if not log_path.is_absolute():
            log_path = log_path.resolve()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError as exc:
            file_error = exc
        else:
            file_handler.setLevel(resolved)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(py_logging.NullHandler())
    logger.propagate = False
    if file_error is not None:
        logger.warning("Could not open log file %s: %s", log_file, file_error)
    return logger
