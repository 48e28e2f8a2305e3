"""
Flattening of wrapped errors into an ordered list of frames.

An error supporting the chain formatting capability implements
format_error(printer). For its own wrap level it writes up to three pieces
of text to the printer, strictly in order: the message, the function that
wrapped the error and the source location. It returns the error it wraps,
or None.

extract_chain walks the chain from the outermost wrap inwards and returns
one Map per frame, followed by the encoding of the innermost error when that
one can't describe itself as a frame:

    - msg: outer
      fun: app.handlers.load
      loc: /srv/app/handlers.py:41
    - msg: inner
      fun: app.store.read
      loc: /srv/app/store.py:12
    - EOF
"""

import inspect
from typing import Any, Callable, List as PyList, Optional

from logtree.core.exceptions.custom_exceptions import (
    ChainProtocolError,
    InvariantViolation,
)
from logtree.encoding.capabilities import (
    ChainFormatter,
    Printer,
    error_message,
    has_format_error,
)
from logtree.value.model import List, Map, String, Value

CYCLE_MARKER = "<cycle>"


class FramePrinter:
    """
    Collects the positional writes format_error makes for one frame.

    The first non-empty write is the message, then the function, then the
    location. Any write beyond that is a bug in the error type and raises
    ChainProtocolError.
    """

    __slots__ = ("msg", "fun", "loc")

    def __init__(self) -> None:
        self.msg = ""
        self.fun = ""
        self.loc = ""

    def print(self, *args: Any) -> None:
        self._write(" ".join(str(a) for a in args))

    def printf(self, format: str, *args: Any) -> None:
        self._write(format % args if args else format)

    def detail(self) -> bool:
        return True

    def _write(self, s: str) -> None:
        s = s.strip()
        if not self.msg:
            self.msg = s
        elif not self.fun:
            self.fun = s
        elif not self.loc:
            self.loc = s
        else:
            raise ChainProtocolError(
                f"unexpected write from format_error: {s!r}",
                details={"text": s, "msg": self.msg},
            )

    def frame(self) -> Map:
        m = Map().append("msg", String(self.msg))
        if self.fun:
            m = m.append("fun", String(self.fun))
        if self.loc:
            m = m.append("loc", String(self.loc))
        return m


def extract_chain(
    err: ChainFormatter, encode: Optional[Callable[[Any], Value]] = None
) -> List:
    """
    Flatten a chain of wrapped errors, outermost first.

    Args:
        err: A value implementing format_error(printer)
        encode: Encoder for the innermost, non-chain error. Defaults to the
            module level encode.

    Returns:
        List: One Map per frame, then the encoded root cause if any

    Raises:
        ChainProtocolError: If a frame writes more than three pieces of text
    """
    if encode is None:
        from logtree.encoding.encoder import encode

    frames: PyList[Value] = []
    seen = set()
    current = err
    while True:
        seen.add(id(current))
        printer = FramePrinter()
        try:
            nxt = current.format_error(printer)
        except InvariantViolation:
            raise
        except Exception as e:
            frames.append(
                printer.frame().append("format_error_error", String(error_message(e)))
            )
            break

        frames.append(printer.frame())
        if nxt is None:
            break
        if id(nxt) in seen:
            frames.append(String(CYCLE_MARKER))
            break
        if has_format_error(nxt):
            current = nxt
            continue
        frames.append(encode(nxt))
        break

    return List(tuple(frames))


class WrappedError(Exception):
    """
    An error wrapping another one with a message and the wrap site.

    Created with wrap(). The wrapped error is also set as __cause__, so
    tracebacks show the chain too.
    """

    def __init__(
        self,
        msg: str,
        err: Optional[BaseException] = None,
        fun: str = "",
        loc: str = "",
    ) -> None:
        super().__init__(f"{msg}: {err}" if err is not None else msg)
        self.msg = msg
        self.err = err
        self.fun = fun
        self.loc = loc
        self.__cause__ = err

    def unwrap(self) -> Optional[BaseException]:
        return self.err

    def format_error(self, p: Printer) -> Optional[BaseException]:
        p.print(self.msg)
        if p.detail() and self.fun:
            p.print(self.fun)
            if self.loc:
                p.print(self.loc)
        return self.err


def wrap(err: Optional[BaseException], msg: str, *args: Any) -> WrappedError:
    """
    Wrap err with a message, recording the calling function and location.

    Example:
        >>> try:
        ...     read_config(path)
        ... except OSError as e:
        ...     raise wrap(e, "failed to load %s", path)
    """
    if args:
        msg = msg % args

    fun = loc = ""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        code = caller.f_code
        module = caller.f_globals.get("__name__", "")
        name = getattr(code, "co_qualname", code.co_name)
        fun = f"{module}.{name}" if module else name
        loc = f"{code.co_filename}:{caller.f_lineno}"
    del frame, caller

    return WrappedError(msg, err, fun=fun, loc=loc)
