# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Console logging for argbind.

Library modules only create loggers with `get_logger()`; nothing is printed
unless an application, such as the `argbind` command, calls `setup_logging()`.
Besides the standard levels a `TRACE` level (5) is available, which the
binders use to log every field decision.
"""

from __future__ import annotations

import atexit
import datetime
import logging
import os
import sys
import traceback
from enum import Enum, IntEnum, unique
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import TYPE_CHECKING, Any, TextIO, cast

if TYPE_CHECKING:
    from logging import _ExcInfoType


LOGLEVEL_ENV = "ARGBIND_LOGLEVEL"

logging.addLevelName(5, "TRACE")


@unique
class ColorMode(Enum):
    """Whether the console handler emits ANSI colors."""

    ALWAYS = "always"
    #: Colors only if the stream is a tty and ``NO_COLOR`` is unset.
    AUTO = "auto"
    NEVER = "never"


def resolve_color_mode(mode: ColorMode, stream: TextIO = sys.stderr) -> bool:
    if sys.platform == "win32":
        return False

    match mode:
        case ColorMode.ALWAYS:
            return True
        case ColorMode.AUTO:
            return os.getenv("NO_COLOR") is None and stream.isatty()
        case ColorMode.NEVER:
            return False


@unique
class Loglevel(IntEnum):
    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = 5

    @classmethod
    def from_str(cls, string: str) -> Loglevel:
        """Converts a numeric level or a case insensitive level name, e.g. ``debug``."""
        if string.isnumeric():
            return cls(int(string, 0))

        try:
            return cls[string.upper()]
        except KeyError:
            raise ValueError(f"{string} not a valid loglevel") from None


def setup_logging(
    level: Loglevel | None = None,
    color_mode: ColorMode = ColorMode.AUTO,
    logger_name: str = "argbind",
) -> None:
    """Attaches a stderr handler to the `logger_name` logger.

    Records are passed through a queue and written by a `QueueListener`
    thread. Handlers attached by an earlier call are removed first.

    :param level: Level of the console handler. If None, ``ARGBIND_LOGLEVEL``
                  is read, falling back to WARNING.
    :param color_mode: See :class:`ColorMode`.
    :param logger_name: The logger to attach the handler to.
    """
    if level is None:
        raw = os.getenv(LOGLEVEL_ENV)
        level = Loglevel.from_str(raw) if raw is not None else Loglevel.WARNING

    logger = logging.getLogger(logger_name)
    # NOTSET would defer to the root logger's level.
    logger.setLevel(1)

    while len(logger.handlers) > 0:
        logger.handlers[0].close()
        logger.removeHandler(logger.handlers[0])

    add_stderr_log_handler(logger_name, level, resolve_color_mode(color_mode))


def add_stderr_log_handler(logger_name: str, level: Loglevel, colored: bool) -> None:
    queue: Queue[Any] = Queue()
    logging.getLogger(logger_name).addHandler(QueueHandler(queue))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(_ConsoleFormatter(colored))

    listener = QueueListener(queue, stderr_handler, respect_handler_level=True)
    listener.start()
    atexit.register(listener.stop)


_RESET = "\033[0m"
_STYLES = {
    Loglevel.TRACE: "\033[0;38;5;245m",
    Loglevel.DEBUG: "\033[0;38;5;245m",
    Loglevel.WARNING: "\033[33m",
    Loglevel.ERROR: "\033[31m",
    Loglevel.CRITICAL: "\033[31m",
}


class _ConsoleFormatter(logging.Formatter):
    """Formats records as ``<time> <logger>: <message>``, plus the traceback."""

    def __init__(self, colored: bool = False) -> None:
        super().__init__()
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.datetime.fromtimestamp(record.created)
        data = record.getMessage()

        if self.colored and (style := _STYLES.get(record.levelno)) is not None:
            data = style + data + _RESET

        msg = f"{dt.strftime('%b %d %H:%M:%S.%f')[:-3]} {record.name}: {data}"

        if record.exc_info:
            msg += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return msg


class Logger(logging.Logger):
    def trace(
        self,
        msg: Any,
        *args: Any,
        exc_info: _ExcInfoType = None,
        stack_info: bool = False,
        extra: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        if self.isEnabledFor(Loglevel.TRACE):
            self._log(
                Loglevel.TRACE,
                msg,
                args,
                exc_info=exc_info,
                extra=extra,
                stack_info=stack_info,
                **kwargs,
            )


logging.setLoggerClass(Logger)


def get_logger(name: str) -> Logger:
    return cast(Logger, logging.getLogger(name))
