"""
JSON rendering of Value trees.

Maps become objects with their fields in tree order, duplicate names
included, so the tree is written out directly instead of going through a
dict. Lists become arrays and scalars their JSON counterparts. Floats that
JSON can't represent are written as the strings "NaN", "Infinity" and
"-Infinity" so the output stays parseable by strict decoders.
"""

import json
import math
from typing import List as PyList, Optional

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


def _string(s: str) -> str:
    try:
        s.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates, e.g. from surrogateescape decoded paths, are
        # written as \u escapes.
        return json.dumps(s)
    return json.dumps(s, ensure_ascii=False)


def _float(f: float) -> str:
    if math.isnan(f):
        return '"NaN"'
    if math.isinf(f):
        return '"Infinity"' if f > 0 else '"-Infinity"'
    return float.__repr__(f)


class _JSONWriter:
    def __init__(self, indent: Optional[int]) -> None:
        self.out: PyList[str] = []
        self.indent = indent

    def newline(self, depth: int) -> None:
        if self.indent is not None:
            self.out.append("\n" + " " * (self.indent * depth))

    def write(self, v: Value, depth: int = 0) -> None:
        if isinstance(v, Null):
            self.out.append("null")
        elif isinstance(v, Bool):
            self.out.append("true" if v.value else "false")
        elif isinstance(v, (Int64, Uint64)):
            self.out.append(str(v.value))
        elif isinstance(v, Float64):
            self.out.append(_float(v.value))
        elif isinstance(v, String):
            self.out.append(_string(v.value))
        elif isinstance(v, Map):
            self.container("{", "}", v.fields, depth, keyed=True)
        elif isinstance(v, List):
            self.container("[", "]", v.items, depth, keyed=False)
        else:
            raise RenderError(
                f"cannot render {type(v).__name__} value as JSON",
                details={"type": type(v).__name__},
            )

    def container(self, open_: str, close: str, entries, depth: int, keyed: bool) -> None:
        self.out.append(open_)
        if not entries:
            self.out.append(close)
            return
        colon = ":" if self.indent is None else ": "
        for i, entry in enumerate(entries):
            if i > 0:
                self.out.append(",")
            self.newline(depth + 1)
            if keyed:
                self.out.append(_string(entry.name) + colon)
                self.write(entry.value, depth + 1)
            else:
                self.write(entry, depth + 1)
        self.newline(depth)
        self.out.append(close)


def render_json(v: Value, indent: Optional[int] = None) -> bytes:
    """
    Render a Value tree as UTF-8 encoded JSON.

    Args:
        v: The tree to render
        indent: Pretty-print with this many spaces per level. Compact
            output without spaces when None.

    Returns:
        bytes: The JSON document, without a trailing newline

    Raises:
        RenderError: If the tree contains something that is not a Value

    Example:
        >>> render_json(Map((Field("name", String("svc")), Field("retries", Int64(3)))))
        b'{"name":"svc","retries":3}'
    """
    w = _JSONWriter(indent)
    w.write(v)
    return "".join(w.out).encode("utf-8")
