"""
Wild (not yet encoded) fields as passed to a log call.

F pairs a name with an arbitrary application value. M is an ordered
collection of F that the encoder turns into a Map, encoding every value and
keeping the given order.
"""

from typing import Any, Iterable, NamedTuple, Union


class F(NamedTuple):
    """A named log field holding an arbitrary value."""

    name: str
    value: Any


class M(tuple):
    """An ordered collection of fields."""

    def __new__(cls, *fields: Union[F, tuple]) -> "M":
        return super().__new__(cls, (_as_field(f) for f in fields))

    @classmethod
    def from_iterable(cls, fields: Iterable[Union[F, tuple]]) -> "M":
        return cls(*fields)

    def combine(self, other: Iterable[Union[F, tuple]]) -> "M":
        other = other if isinstance(other, M) else M.from_iterable(other)
        if not other:
            return self
        return M(*self, *other)

    def __repr__(self) -> str:
        return "M(" + ", ".join(repr(f) for f in self) + ")"


def _as_field(f: Union[F, tuple]) -> F:
    if isinstance(f, F):
        return f
    name, value = f
    return F(str(name), value)


def error(err: BaseException) -> F:
    """The standard field for logging an exception."""
    return F("error", err)
