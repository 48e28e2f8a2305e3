"""
Log levels, the entry handed to sinks and the Sink interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Tuple

from logtree.value.fields import M


class Level(IntEnum):
    """Severity of an entry. Sinks drop entries below their level."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    CRITICAL = 4
    FATAL = 5

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, name: str) -> "Level":
        """
        Look a level up by name, case-insensitively. WARNING is accepted as
        an alias of WARN.

        Raises:
            ValueError: If name is not a level
        """
        key = name.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown log level: {name!r}") from None


@dataclass(frozen=True)
class SinkEntry:
    """
    One log entry as delivered to a sink.

    Fields are still the raw values passed by the application; sinks encode
    them when they render the entry.

    Attributes:
        time: When the entry was logged, in UTC
        level: Severity
        message: The log message
        logger_names: Names added with Logger.named, outermost first
        func: Qualified name of the logging function
        file: Source file of the logging call
        line: Line of the logging call
        fields: Context, logger and call fields, in that order
    """

    time: datetime
    level: Level
    message: str
    logger_names: Tuple[str, ...] = ()
    func: str = ""
    file: str = ""
    line: int = 0
    fields: M = field(default_factory=M)

    @property
    def logger_name(self) -> str:
        return ".".join(self.logger_names)


class Sink(ABC):
    """Destination of log entries."""

    @abstractmethod
    def log_entry(self, entry: SinkEntry) -> None:
        """Write one entry."""

    @abstractmethod
    def sync(self) -> None:
        """Flush buffered entries to durable storage."""

    def close(self) -> None:
        """Release the destination. Syncs by default."""
        self.sync()
