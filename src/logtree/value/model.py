"""
The Value model: the closed set of primitive types every logged value is
reduced to before rendering.

The encoder turns arbitrary application objects into a tree of these types
and the renderers only ever see this tree. Every variant is a frozen
dataclass; containers hold tuples so a tree can't be mutated once built.

Classes:
    Value: Marker base class of every variant
    Null, Bool, Int64, Uint64, Float64, String: Scalars
    Field: A named entry of a Map
    Map: Ordered (name, Value) sequence, names not required to be unique
    List: Ordered Value sequence

Example:
    >>> from logtree.value.model import Field, Int64, Map, String
    >>> m = Map((Field("name", String("svc")), Field("retries", Int64(3))))
    >>> [f.name for f in m]
    ['name', 'retries']
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple, Union

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class Value:
    """Marker base class for the Value variants."""

    __slots__ = ()


@dataclass(frozen=True)
class Null(Value):
    """The absent value."""


NULL = Null()


@dataclass(frozen=True)
class Bool(Value):
    value: bool


@dataclass(frozen=True)
class Int64(Value):
    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} does not fit in a signed 64 bit integer")


@dataclass(frozen=True)
class Uint64(Value):
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= UINT64_MAX:
            raise ValueError(
                f"{self.value} does not fit in an unsigned 64 bit integer"
            )


@dataclass(frozen=True)
class Float64(Value):
    value: float


@dataclass(frozen=True)
class String(Value):
    value: str


@dataclass(frozen=True)
class Field:
    """A named entry of a Map."""

    name: str
    value: Value


@dataclass(frozen=True)
class Map(Value):
    """
    An ordered map of fields.

    Order is meaningful and preserved by both renderers. Names are not
    required to be unique; a logger that accumulates fields may legitimately
    carry the same name twice.
    """

    fields: Tuple[Field, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Value]]) -> "Map":
        return cls(tuple(Field(name, value) for name, value in pairs))

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of the first field called name."""
        for f in self.fields:
            if f.name == name:
                return f.value
        return default

    def append(self, name: str, value: Value) -> "Map":
        return Map(self.fields + (Field(name, value),))

    def extend(self, other: "Map") -> "Map":
        if not other.fields:
            return self
        return Map(self.fields + other.fields)

    def sorted(self) -> "Map":
        """
        Return a copy sorted by field name.

        Only used when the fields come from an unordered native mapping.
        Fields with equal names are ordered by their values, so the result
        doesn't depend on insertion order.
        """
        return Map(tuple(sorted(self.fields, key=_field_order)))


def _field_order(f: Field) -> Tuple[str, str, str]:
    return (f.name, type(f.value).__name__, repr(f.value))


@dataclass(frozen=True)
class List(Value):
    """An ordered list of values."""

    items: Tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


Scalar = Union[Null, Bool, Int64, Uint64, Float64, String]


def is_scalar(v: Value) -> bool:
    return not isinstance(v, (Map, List))


class _JSONObject(list):
    """Key/value pairs of a decoded JSON object, in document order."""


def from_json(text: Union[str, bytes]) -> Value:
    """
    Decode JSON text into a Value tree, keeping object keys in document order.

    Integers become Int64 (Uint64 above the signed range), other numbers
    become Float64. Integers too large for either are kept as their decimal
    String so nothing is lost.

    Raises:
        json.JSONDecodeError: If text is not valid JSON
    """
    decoded = json.loads(text, object_pairs_hook=_JSONObject)
    return _from_decoded(decoded)


def _from_decoded(v: Any) -> Value:
    if v is None:
        return NULL
    if isinstance(v, bool):
        return Bool(v)
    if isinstance(v, int):
        return int_value(v)
    if isinstance(v, float):
        return Float64(v)
    if isinstance(v, str):
        return String(v)
    if isinstance(v, _JSONObject):
        return Map.from_pairs((k, _from_decoded(item)) for k, item in v)
    if isinstance(v, list):
        return List(tuple(_from_decoded(item) for item in v))
    return String(str(v))


def int_value(n: int) -> Value:
    """Pick the integer variant that can hold n."""
    if INT64_MIN <= n <= INT64_MAX:
        return Int64(n)
    if 0 <= n <= UINT64_MAX:
        return Uint64(n)
    return String(str(n))
