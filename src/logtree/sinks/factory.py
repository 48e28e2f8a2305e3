"""
Building loggers from Settings.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO

from logtree.core.config.settings import Settings, get_settings
from logtree.core.exceptions.custom_exceptions import ConfigurationError
from logtree.core.logging.logger import get_logger
from logtree.logger.entry import Level, Sink
from logtree.logger.logger import Logger, make
from logtree.sinks.human_sink import HumanSink
from logtree.sinks.json_sink import JSONSink


def _open_destination(settings: Settings) -> TextIO:
    if not settings.LOG_FILE_PATH:
        return sys.stderr
    path = Path(settings.LOG_FILE_PATH)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, "a", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"cannot open log file {path}: {e}",
            error_code="LOG_FILE_ERROR",
            details={"path": str(path)},
        ) from e


def make_sink(settings: Settings, stream: Optional[TextIO] = None) -> Sink:
    """
    Build the sink LOG_FORMAT asks for.

    Args:
        settings: Configuration to read
        stream: Destination overriding LOG_FILE_PATH and stderr. A log file
            opened here is closed with the sink.

    Raises:
        ConfigurationError: If the log file can't be opened
    """
    owned = stream is None and bool(settings.LOG_FILE_PATH)
    stream = stream if stream is not None else _open_destination(settings)
    if settings.LOG_FORMAT == "json":
        return JSONSink(stream, close_stream=owned)
    color = True if settings.FORCE_COLOR else None
    return HumanSink(stream, color=color, close_stream=owned)


def make_from_settings(
    settings: Optional[Settings] = None, stream: Optional[TextIO] = None
) -> Logger:
    """
    Build a logger from settings, loaded from the environment when omitted.

    Example:
        >>> log = make_from_settings(Settings(LOG_FORMAT="json", LOG_LEVEL="warn"))
    """
    settings = settings or get_settings()
    sink = make_sink(settings, stream)
    get_logger(__name__).debug(
        "logger built",
        format=settings.LOG_FORMAT,
        level=settings.LOG_LEVEL,
        file=settings.LOG_FILE_PATH,
    )
    return make(sink, level=Level.parse(settings.LOG_LEVEL))
