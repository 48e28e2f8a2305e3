"""
Human readable rendering of Value trees.

The output is YAML-like: one field per line, nested maps and lists indented
by two spaces, list elements introduced by "-". Two spaces work well with
lists because a map inside a list lines its fields up under the dash:

    - field: val
      field: val

The rendered text never ends with a newline, and fields of the top level Map
are not indented. Sinks that print entries add their own indentation.

Example:
    >>> from logtree.value.model import Field, Int64, Map, String
    >>> print(render(Map((Field("name", String("svc")), Field("retries", Int64(3))))))
    name: svc
    retries: 3
"""

import json
import math
from decimal import Decimal
from typing import List as PyList

from logtree.core.exceptions.custom_exceptions import RenderError
from logtree.value.model import (
    Bool,
    Float64,
    Int64,
    List,
    Map,
    Null,
    String,
    Uint64,
    Value,
)

INDENT = "  "

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


class _HumanRenderer:
    def __init__(self) -> None:
        self.out: PyList[str] = []
        self.indent_str = ""

    def line(self) -> None:
        self.out.append("\n" + self.indent_str)

    def write(self, s: str) -> None:
        self.out.append(s)

    def indent(self) -> None:
        self.indent_str += INDENT

    def unindent(self) -> None:
        self.indent_str = self.indent_str[: -len(INDENT)]

    def render(self, v: Value) -> None:
        if isinstance(v, String):
            # Continuation lines of a string sit one level below its key.
            self.indent()
            self.write(v.value.replace("\n", "\n" + self.indent_str))
            self.unindent()
        elif isinstance(v, Bool):
            self.write("true" if v.value else "false")
        elif isinstance(v, (Int64, Uint64)):
            self.write(str(v.value))
        elif isinstance(v, Float64):
            self.write(format_float(v.value))
        elif isinstance(v, Null):
            self.write("null")
        elif isinstance(v, Map):
            for i, f in enumerate(v):
                if i > 0:
                    self.line()
                self.write(quote_key(f.name) + ":")
                self.render_child(f.value, in_map=True)
        elif isinstance(v, List):
            for item in v:
                self.line()
                self.write("-")
                if not isinstance(item, List):
                    self.write(" ")
                self.render_child(item, in_map=False)
        else:
            raise RenderError(
                f"cannot render {type(v).__name__} value",
                details={"type": type(v).__name__},
            )

    def render_child(self, v: Value, in_map: bool) -> None:
        if isinstance(v, Map):
            if in_map and not v.fields:
                # An empty map leaves the bare key.
                return
            self.indent()
            if in_map:
                self.line()
        elif isinstance(v, List):
            self.indent()
        elif in_map:
            self.write(" ")

        self.render(v)

        if isinstance(v, (Map, List)):
            self.unindent()


def render(v: Value) -> str:
    """
    Render a Value tree in the human readable format.

    Raises:
        RenderError: If the tree contains something that is not a Value
    """
    r = _HumanRenderer()
    r.render(v)
    return "".join(r.out)


def format_float(f: float) -> str:
    """
    Format f as the shortest decimal that reads back as the same float,
    always in positional notation.
    """
    if math.isnan(f):
        return "nan"
    if math.isinf(f):
        return "inf" if f > 0 else "-inf"
    s = repr(f)
    if "e" not in s and "E" not in s:
        return s
    return format(Decimal(s), "f")


def _escape_char(c: str) -> str:
    if c in _ESCAPES:
        return _ESCAPES[c]
    if c.isprintable():
        return c
    cp = ord(c)
    if cp > 0xFFFF:
        cp -= 0x10000
        return "\\u%04x\\u%04x" % (0xD800 + (cp >> 10), 0xDC00 + (cp & 0x3FF))
    return "\\u%04x" % cp


def quote(s: str) -> str:
    """
    Quote s so it fits on one line, unless it doesn't need quoting.

    Quoted strings use JSON escapes, so json.loads reverses them. The empty
    string is always quoted.
    """
    if s == "":
        return '""'
    escaped = "".join(_escape_char(c) for c in s)
    if escaped == s:
        return s
    return '"' + escaped + '"'


def quote_key(key: str) -> str:
    """Quote a map key, with spaces replaced by underscores first."""
    return quote(key.replace(" ", "_"))


def unquote_key(key: str) -> str:
    """
    Reverse quote. Spaces turned into underscores by quote_key stay
    underscores.
    """
    if key.startswith('"'):
        return json.loads(key)
    return key
