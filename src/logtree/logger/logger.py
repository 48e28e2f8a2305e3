"""
The Logger facade.

A Logger fans entries out to a set of sinks. Each sink carries its own
minimum level, logger names and accumulated fields, so loggers combined with
tee keep the configuration they were built with. Loggers are immutable:
with_fields, named and leveled return new loggers and leave the receiver
untouched, which makes them safe to share between threads and tasks.

There is no process-wide default logger. Build one with make() and pass it
to the code that needs it.

Example:
    >>> import sys
    >>> from logtree.sinks import HumanSink
    >>> log = make(HumanSink(sys.stderr)).named("worker")
    >>> log.info("job done", F("job", job), retries=3)
"""

import inspect
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import CodeType, FrameType
from typing import Any, Callable, Iterable, Optional, Set, Tuple, Union

from logtree.core.exceptions.custom_exceptions import InvariantViolation, SinkError
from logtree.core.logging.logger import get_logger
from logtree.logger.context import current_fields
from logtree.logger.entry import Level, Sink, SinkEntry
from logtree.value.fields import F, M

FieldArg = Union[F, Tuple[str, Any]]
Location = Tuple[str, str, int]

# Frames from this package are never reported as the logging call site.
_PACKAGE = __name__.rsplit(".", 1)[0]

_helpers: Set[CodeType] = set()
_helpers_lock = threading.Lock()


def helper(fn: Callable) -> Callable:
    """
    Mark fn as a logging helper.

    Entries logged from inside a helper report the location of the helper's
    caller instead, the same way pytest hides frames marked with
    __tracebackhide__.

    Example:
        >>> @helper
        ... def log_request(log, req):
        ...     log.info("request", F("path", req.path))
    """
    codes = []
    for f in (fn, inspect.unwrap(fn)):
        code = getattr(f, "__code__", None)
        if code is not None:
            codes.append(code)
    with _helpers_lock:
        _helpers.update(codes)
    return fn


def _is_helper(code: CodeType) -> bool:
    with _helpers_lock:
        return code in _helpers


def _frame_location(f: FrameType) -> Location:
    code = f.f_code
    module = f.f_globals.get("__name__", "")
    name = getattr(code, "co_qualname", code.co_name)
    func = f"{module}.{name}" if module else name
    return func, code.co_filename, f.f_lineno


def _caller() -> Location:
    """Find the first frame outside logtree's logger and any helper."""
    frame = inspect.currentframe()
    try:
        f = frame.f_back if frame is not None else None
        first = None
        while f is not None:
            module = f.f_globals.get("__name__", "")
            if module == _PACKAGE or module.startswith(_PACKAGE + "."):
                f = f.f_back
                continue
            if first is None:
                first = f
            if not _is_helper(f.f_code):
                return _frame_location(f)
            f = f.f_back
        # Everything up the stack is a helper.
        if first is not None:
            return _frame_location(first)
        return "", "", 0
    finally:
        del frame


@dataclass(frozen=True)
class _SinkBinding:
    sink: Sink
    level: Level = Level.DEBUG
    names: Tuple[str, ...] = ()
    fields: M = field(default_factory=M)


def _fields(fields: Tuple[FieldArg, ...], kw: dict) -> M:
    return M(*fields, *kw.items())


class Logger:
    """
    Logs entries with ordered fields to a set of sinks.

    Entries below a sink's level are not delivered to that sink. Entries at
    ERROR and above sync every sink after being written, and FATAL then
    exits the process with status 1.
    """

    __slots__ = ("_sinks",)

    def __init__(self, sinks: Iterable[_SinkBinding] = ()) -> None:
        self._sinks: Tuple[_SinkBinding, ...] = tuple(sinks)

    def __repr__(self) -> str:
        sinks = ", ".join(type(b.sink).__name__ for b in self._sinks)
        return f"Logger({sinks})"

    @property
    def sinks(self) -> Tuple[Sink, ...]:
        return tuple(b.sink for b in self._sinks)

    def enabled(self, level: Level) -> bool:
        """Report whether any sink accepts entries at level."""
        return any(level >= b.level for b in self._sinks)

    def with_fields(self, *fields: FieldArg, **kw: Any) -> "Logger":
        """Return a logger adding fields to every entry, after existing ones."""
        extra = _fields(fields, kw)
        if not extra:
            return self
        return Logger(replace(b, fields=b.fields.combine(extra)) for b in self._sinks)

    def named(self, name: str) -> "Logger":
        """
        Return a logger with name appended to its names.

        Names are joined with "." when rendered, so
        log.named("http").named("client") logs as "http.client".
        """
        if not name:
            return self
        return Logger(replace(b, names=b.names + (name,)) for b in self._sinks)

    def leveled(self, level: Union[Level, str]) -> "Logger":
        """Return a logger whose sinks all use level as their minimum."""
        if isinstance(level, str):
            level = Level.parse(level)
        return Logger(replace(b, level=Level(level)) for b in self._sinks)

    def debug(self, msg: str, *fields: FieldArg, **kw: Any) -> None:
        self._log(Level.DEBUG, msg, _fields(fields, kw))

    def info(self, msg: str, *fields: FieldArg, **kw: Any) -> None:
        self._log(Level.INFO, msg, _fields(fields, kw))

    def warn(self, msg: str, *fields: FieldArg, **kw: Any) -> None:
        self._log(Level.WARN, msg, _fields(fields, kw))

    warning = warn

    def error(self, msg: str, *fields: FieldArg, **kw: Any) -> None:
        self._log(Level.ERROR, msg, _fields(fields, kw))

    def critical(self, msg: str, *fields: FieldArg, **kw: Any) -> None:
        self._log(Level.CRITICAL, msg, _fields(fields, kw))

    def fatal(self, msg: str, *fields: FieldArg, **kw: Any) -> None:
        """Log at FATAL, sync and raise SystemExit(1)."""
        self._log(Level.FATAL, msg, _fields(fields, kw))

    def log(self, level: Level, msg: str, *fields: FieldArg, **kw: Any) -> None:
        """Log at an explicit level."""
        self._log(Level(level), msg, _fields(fields, kw))

    def _log(
        self,
        level: Level,
        msg: str,
        fields: M,
        location: Optional[Location] = None,
    ) -> None:
        targets = [b for b in self._sinks if level >= b.level]
        if targets:
            func, file, line = location if location is not None else _caller()
            ctx = current_fields()
            now = datetime.now(timezone.utc)
            for b in targets:
                entry = SinkEntry(
                    time=now,
                    level=level,
                    message=msg,
                    logger_names=b.names,
                    func=func,
                    file=file,
                    line=line,
                    fields=ctx.combine(b.fields).combine(fields),
                )
                try:
                    b.sink.log_entry(entry)
                except InvariantViolation:
                    raise
                except Exception as e:
                    _report("sink failed to log entry", b, e, "SINK_WRITE_ERROR")

        if level >= Level.ERROR:
            self.sync()
            if level == Level.FATAL:
                raise SystemExit(1)

    def sync(self) -> None:
        """Sync every sink. A failing sink doesn't stop the others."""
        for b in self._sinks:
            try:
                b.sink.sync()
            except Exception as e:
                _report("sink failed to sync", b, e, "SINK_SYNC_ERROR")

    def close(self) -> None:
        """Close every sink, releasing files they own."""
        for b in self._sinks:
            try:
                b.sink.close()
            except Exception as e:
                _report("sink failed to close", b, e, "SINK_CLOSE_ERROR")

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _report(
    event: str, binding: _SinkBinding, err: Exception, error_code: str
) -> None:
    sink_error = SinkError(
        f"{type(binding.sink).__name__}: {err}",
        error_code=error_code,
        details={
            "sink": type(binding.sink).__name__,
            "logger_name": ".".join(binding.names),
        },
    )
    sink_error.__cause__ = err
    get_logger(__name__).error(
        event,
        error_code=sink_error.error_code,
        error=str(err),
        exc_info=sink_error,
        **sink_error.details,
    )


def make(*sinks: Sink, level: Union[Level, str] = Level.DEBUG) -> Logger:
    """
    Build a logger writing to sinks.

    Args:
        *sinks: Destinations of the entries
        level: Minimum level of every sink

    Example:
        >>> log = make(JSONSink(sys.stdout), level=Level.INFO)
    """
    if isinstance(level, str):
        level = Level.parse(level)
    return Logger(_SinkBinding(s, Level(level)) for s in sinks)


def tee(*loggers: Logger) -> Logger:
    """
    Combine loggers into one logging to all their sinks.

    Every sink keeps the level, names and fields of the logger it came from.
    """
    return Logger(b for log in loggers for b in log._sinks)
