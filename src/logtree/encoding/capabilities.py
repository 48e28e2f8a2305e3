"""
Capabilities a value can expose to control how it is logged.

A capability is a method (or a shape) the encoder detects at runtime. The
encoder checks them in a fixed priority order, and the first match decides
the encoding, so a type can take over its own representation without
subclassing anything from logtree.

Detection is done by the has_* and is_* predicates below, which look
methods up on the type. The protocols describe those shapes for type
annotations.

Protocols:
    LogValuer: log_value() returns a replacement value to encode
    Printer: Receives the pieces of one wrapped error frame
    ChainFormatter: format_error(printer) describes one frame and returns
        the wrapped error
"""

import numbers
import weakref
from typing import Any, Callable, Optional, Protocol

# Fields of protobuf generated messages starting with this prefix hold
# internal bookkeeping and are never logged.
PROTO_INTERNAL_PREFIX = "XXX_"


class LogValuer(Protocol):
    def log_value(self) -> Any:
        ...


class Printer(Protocol):
    def print(self, *args: Any) -> None:
        ...

    def printf(self, format: str, *args: Any) -> None:
        ...

    def detail(self) -> bool:
        ...


class ChainFormatter(Protocol):
    def format_error(self, printer: Printer) -> Optional[BaseException]:
        ...


class Lazy:
    """
    Defers computing a field value until an entry is actually encoded.

    Example:
        >>> logger.debug("state", F("dump", Lazy(expensive_dump)))
    """

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[], Any]) -> None:
        self.fn = fn

    def __call__(self) -> Any:
        return self.fn()

    def __repr__(self) -> str:
        return f"Lazy({self.fn!r})"


def _method(v: Any, name: str) -> Optional[Callable]:
    # Look the method up on the type so instances that merely carry an
    # attribute of that name (e.g. a dict entry or a mock) don't match.
    attr = getattr(type(v), name, None)
    if attr is None or not callable(attr):
        return None
    return getattr(v, name)


def has_log_value(v: Any) -> bool:
    return not isinstance(v, type) and _method(v, "log_value") is not None


def has_format_error(v: Any) -> bool:
    return not isinstance(v, type) and _method(v, "format_error") is not None


def is_error(v: Any) -> bool:
    return isinstance(v, BaseException)


def error_message(err: BaseException) -> str:
    """The message of err, or its type name when the message is empty."""
    try:
        msg = str(err)
    except Exception:
        msg = ""
    return msg or type(err).__name__


def is_proto_message(v: Any) -> bool:
    """
    Report whether v looks like a protocol buffer generated message.

    Duck-typed on the descriptor and the serializer so the protobuf runtime
    is not a dependency.
    """
    typ = type(v)
    return (
        not isinstance(v, type)
        and hasattr(typ, "DESCRIPTOR")
        and callable(getattr(typ, "SerializeToString", None))
    )


def is_pydantic_model(v: Any) -> bool:
    return not isinstance(v, type) and hasattr(type(v), "model_fields")


def is_stringer(v: Any) -> bool:
    """
    Report whether the type of v provides its own string form.

    Types that inherit __str__ from object or from a builtin type don't
    count, so plain objects and containers are still encoded structurally.
    """
    if isinstance(v, (type, numbers.Number, str, bytes, bytearray)):
        return False
    for klass in type(v).__mro__:
        if "__str__" in vars(klass):
            return klass is not object and klass.__module__ != "builtins"
    return False


def is_reference(v: Any) -> bool:
    return isinstance(v, weakref.ref)
