"""Logging setup for gmux.

The interactive screen owns stdout/stderr, so log records only go to a file
when one is requested; otherwise the package logger stays silent.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOGGER_NAME = "gmux"
LOG_FILE_ENV = "GMUX_LOG_FILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None = None, verbose: bool = False) -> logging.Logger:
    """Attach a file handler to the ``gmux`` logger, or a null handler.

    ``log_file`` falls back to ``$GMUX_LOG_FILE``. Calling this repeatedly
    replaces previously installed handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        env_value = os.environ.get(LOG_FILE_ENV, "").strip()
        if env_value:
            log_file = Path(env_value).expanduser()

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
