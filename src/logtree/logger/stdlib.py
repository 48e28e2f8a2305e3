"""
Bridge from the standard library logging module into a Logger.

Libraries that log through logging can be routed into logtree sinks by
installing a StdlibHandler. Records keep their own source location and
their level is mapped onto the closest logtree level.

Example:
    >>> import logging
    >>> logging.getLogger("urllib3").addHandler(StdlibHandler(log))
"""

import logging

from logtree.logger.entry import Level
from logtree.logger.logger import Logger
from logtree.value.fields import F, M


def level_from_stdlib(levelno: int) -> Level:
    if levelno >= logging.CRITICAL:
        return Level.CRITICAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    return Level.DEBUG


class StdlibHandler(logging.Handler):
    """
    A logging.Handler forwarding records to a Logger named "stdlib".

    The record's logger name becomes a field, and exception info, when
    present, is logged as the error field.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.logger = logger.named("stdlib")

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = record.getMessage()
            fields = [F("logger", record.name)]
            if record.exc_info and record.exc_info[1] is not None:
                fields.append(F("error", record.exc_info[1]))
            location = (record.funcName, record.pathname, record.lineno)
            level = level_from_stdlib(record.levelno)
            self.logger._log(level, msg, M(*fields), location=location)
        except Exception:
            self.handleError(record)
