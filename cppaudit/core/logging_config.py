# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Logging configuration for cppaudit.

The pipeline never reaches for a process-wide logger on its own: the CLI
calls :func:`setup_logging` once and hands the returned logger to
:func:`cppaudit.application.orchestrator.run_pipeline`. Library modules log
through children of the ``cppaudit`` logger.

Functions
---------
setup_logging : Configure the ``cppaudit`` logger
resolve_level : Map a level name to a numeric logging level

Examples
--------
>>> logger = setup_logging(level="debug")
>>> logger.debug("Running cppcheck")

See Also
--------
cppaudit.config.config_schema.LoggingConfig : Logging settings
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

LOGGER_NAME = "cppaudit"

#: Level below DEBUG used for dumping raw analyzer results.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

CLICOLOR_FORCE = "CLICOLOR_FORCE"

_LEVEL_NAMES = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter that wraps the whole line in an ANSI colour picked by level.

    Colour is applied when ``force`` is True, or when ``force`` is None and
    the stream is a terminal or ``CLICOLOR_FORCE`` is set.
    """

    COLORS = {
        logging.ERROR: '\033[31m',    # Red
        logging.WARNING: '\033[33m',  # Yellow
        logging.INFO: '\033[37m',     # White
        logging.DEBUG: '\033[34m',    # Blue
    }
    RESET = '\033[0m'

    def __init__(
        self,
        fmt: Optional[str] = None,
        *,
        stream: Optional[TextIO] = None,
        force: Optional[bool] = None,
    ) -> None:
        super().__init__(fmt)
        self.stream = stream
        self.force = force

    def supports_color(self) -> bool:
        if self.force is not None:
            return self.force
        if os.environ.get(CLICOLOR_FORCE) is not None:
            return True
        stream = self.stream if self.stream is not None else sys.stderr
        return hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record):
        """Format log record, colouring it when the stream supports it."""
        line = super().format(record)
        if not self.supports_color():
            return line
        color = self.COLORS.get(record.levelno, '')
        if not color and record.levelno > logging.ERROR:
            color = self.COLORS[logging.ERROR]
        if not color:
            return line
        return f"{color}{line}{self.RESET}"


def resolve_level(level: str | int | None) -> int:
    """
    Map a level name (``error``, ``warn``, ``info``, ``debug``, ``trace``) to
    a numeric level. Unknown or missing names resolve to TRACE.

    Example:
        >>> resolve_level("warn") == logging.WARNING
        True
    """
    if isinstance(level, int):
        return level
    if not level:
        return TRACE
    return _LEVEL_NAMES.get(level.strip().lower(), TRACE)


def setup_logging(
    level: str | int | None = "INFO",
    color: str = "auto",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``cppaudit`` logger to write leveled lines to stderr.

    Args:
        level: Level name or number; see :func:`resolve_level`.
        color: ``auto`` (terminal or CLICOLOR_FORCE), ``always`` or ``never``.
        stream: Output stream. Defaults to ``sys.stderr``.

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(level='trace', color='never')
        >>> logger.log(TRACE, 'raw output')
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))

    # Remove existing handlers
    logger.handlers.clear()

    target = stream if stream is not None else sys.stderr
    force = {"always": True, "never": False}.get(color)
    handler = logging.StreamHandler(target)
    handler.setFormatter(
        ColoredFormatter(
            '%(filename)s:%(lineno)d [%(levelname)s][%(name)s]: %(message)s',
            stream=target,
            force=force,
        )
    )
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger
