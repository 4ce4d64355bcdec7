#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdattention/logging_utils.py
"""Logging setup for applications that embed the mdattention hosts.

Every module logs through ``logging.getLogger(__name__)``, so all records
live under the ``mdattention`` logger. Libraries should not touch logging
configuration on import; call :func:`configure_logging` from the embedding
application (or a test) when those records should be shown.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mdattention"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def resolve_level(log_level: int | str) -> int:
    """Return the numeric level for a level number or name; unknown names map to INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to a logger.

    Handlers previously installed on the same logger are replaced, so calling
    this twice does not duplicate output. When ``logger_name`` names the
    package logger, records stop propagating to the root logger to avoid
    printing them twice in applications that configured the root themselves.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that receives a copy of the output.
    trace_mode : bool, default False
        When true, include timestamps and logger names, which makes the
        DEBUG messages of the factories and hosts easier to follow.
    logger_name : str, default "mdattention"
        Logger to configure; pass ``""`` for the root logger.

    Returns
    -------
    logging.Logger
        The configured logger.

    """
    level = resolve_level(log_level)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = logger_name != PACKAGE_LOGGER

    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger
