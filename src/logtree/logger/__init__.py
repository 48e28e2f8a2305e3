"""
logtree Logger Module - The logging facade.

Components:
    - Logger / make / tee: Immutable loggers fanning entries out to sinks
    - Level / SinkEntry / Sink: What sinks receive and implement
    - context_fields: Fields carried by the execution context
    - helper: Hide wrapper functions from reported call sites
    - StdlibHandler: Route the logging module into a Logger
"""

from logtree.logger.context import context_fields, current_fields
from logtree.logger.entry import Level, Sink, SinkEntry
from logtree.logger.logger import Logger, helper, make, tee
from logtree.logger.stdlib import StdlibHandler, level_from_stdlib

__all__ = [
    "Level",
    "Logger",
    "Sink",
    "SinkEntry",
    "StdlibHandler",
    "context_fields",
    "current_fields",
    "helper",
    "level_from_stdlib",
    "make",
    "tee",
]
