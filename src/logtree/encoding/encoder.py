"""
Reflective encoding of arbitrary application values into a Value tree.

encode() accepts anything and always returns a Value. It never raises for
odd or broken application data: values that can't be introspected fall back
to their string form, and capability methods that fail are logged as a Map
carrying the failure message. The one exception is ChainProtocolError,
which signals a broken error type rather than bad data.

Encoding order:
    1. Indirection: None, weak references, Lazy thunks, values that are
       already a Value, and F/M field collections.
    2. Capabilities, first match wins:
        a. log_value(): encode the replacement value instead
        b. format_error(printer): flatten the wrapped error chain
        c. exceptions: the error message
        d. types with their own __str__: the string form, except protobuf
           messages, pydantic models and registered types, which keep
           their structure
    3. Structure: scalars, registered types and other aggregates, mappings
       (sorted by key), sets (sorted), sequences, then str() as a last resort.

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Job:
    ...     name: str
    ...     retries: int
    >>> encode(Job("svc", 3))
    Map(fields=(Field(name='name', value=String(value='svc')), Field(name='retries', value=Int64(value=3))))
"""

import dataclasses
import inspect
import numbers
from collections.abc import Mapping, Sequence, Set
from typing import Any, Callable, List as PyList, Optional, Tuple

from logtree.core.exceptions.custom_exceptions import InvariantViolation
from logtree.encoding.capabilities import (
    PROTO_INTERNAL_PREFIX,
    ChainFormatter,
    Lazy,
    LogValuer,
    error_message,
    has_format_error,
    has_log_value,
    is_error,
    is_proto_message,
    is_pydantic_model,
    is_reference,
    is_stringer,
)
from logtree.encoding.chain import CYCLE_MARKER, extract_chain
from logtree.encoding.naming import snakecase
from logtree.encoding.registry import (
    FieldOptions,
    TypeOptions,
    TypeRegistry,
    default_registry,
)
from logtree.value.fields import F, M
from logtree.value.model import (
    NULL,
    Bool,
    Field,
    Float64,
    List,
    Map,
    String,
    Uint64,
    UINT64_MAX,
    Value,
    int_value,
)

VisitFunc = Callable[[Any, "Encoder"], Optional[Value]]

_DEFAULT_FIELD = FieldOptions()

_SCALAR_TYPES = (str, bytes, bytearray, bool, int, float)


class _EncodeState:
    """Identities of the containers on the current encoding path."""

    __slots__ = ("active",)

    def __init__(self) -> None:
        self.active = set()


class Encoder:
    """
    Converts arbitrary values into Value trees.

    Args:
        registry: Per-type logging metadata. Defaults to the registry the
            loggable decorator writes to.
        visit: Optional hook consulted before any other rule. Returning a
            Value overrides the encoding of that value, returning None falls
            through to the regular rules.

    Encoder instances hold no per-call state and can be shared between
    threads.
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        visit: Optional[VisitFunc] = None,
    ) -> None:
        self.registry = registry or default_registry
        self.visit = visit
        # Consulted in order; the first capability a value has wins.
        self.capabilities: Tuple[Tuple[str, Callable[[Any], bool], Callable], ...] = (
            ("log_value", has_log_value, self._encode_log_value),
            ("format_error", has_format_error, self._encode_chain),
            ("error", is_error, self._encode_error),
            ("stringer", self._is_stringer, self._encode_stringer),
        )

    def encode(self, v: Any) -> Value:
        return self._encode(v, _EncodeState())

    def encode_fields(self, fields: M) -> Map:
        """Encode an ordered field collection into a Map."""
        state = _EncodeState()
        return Map(tuple(Field(f.name, self._encode(f.value, state)) for f in fields))

    def _encode(self, v: Any, state: _EncodeState) -> Value:
        if self.visit is not None:
            visited = self.visit(v, self)
            if visited is not None:
                return visited

        if v is None:
            return NULL
        if isinstance(v, Value):
            return v
        if type(v) in _SCALAR_TYPES:
            return self._structural(v, state)

        key = id(v)
        if key in state.active:
            return String(CYCLE_MARKER)
        state.active.add(key)
        try:
            return self._dispatch(v, state)
        finally:
            state.active.discard(key)

    def _dispatch(self, v: Any, state: _EncodeState) -> Value:
        if isinstance(v, M):
            return Map(tuple(Field(f.name, self._encode(f.value, state)) for f in v))
        if isinstance(v, F):
            return Map((Field(v.name, self._encode(v.value, state)),))
        if is_reference(v):
            return self._encode(v(), state)
        if isinstance(v, Lazy):
            return self._encode_lazy(v, state)

        for _, matches, handler in self.capabilities:
            if matches(v):
                return handler(v, state)

        return self._structural(v, state)

    def _encode_lazy(self, v: Lazy, state: _EncodeState) -> Value:
        try:
            resolved = v()
        except InvariantViolation:
            raise
        except Exception as e:
            return Map((Field("lazy_error", String(error_message(e))),))
        return self._encode(resolved, state)

    def _encode_log_value(self, v: LogValuer, state: _EncodeState) -> Value:
        try:
            replacement = v.log_value()
        except InvariantViolation:
            raise
        except Exception as e:
            return Map((Field("log_value_error", String(error_message(e))),))
        return self._encode(replacement, state)

    def _encode_chain(self, v: ChainFormatter, state: _EncodeState) -> Value:
        return extract_chain(v, encode=lambda inner: self._encode(inner, state))

    def _encode_error(self, v: BaseException, state: _EncodeState) -> Value:
        return String(error_message(v))

    def _is_stringer(self, v: Any) -> bool:
        if not is_stringer(v):
            return False
        # Structured messages keep their fields instead of a flat string.
        if is_proto_message(v) or is_pydantic_model(v):
            return False
        return self.registry.lookup(type(v)) is None

    def _encode_stringer(self, v: Any, state: _EncodeState) -> Value:
        try:
            return String(str(v))
        except InvariantViolation:
            raise
        except Exception:
            return _default_format(v)

    def _structural(self, v: Any, state: _EncodeState) -> Value:
        if isinstance(v, bool):
            return Bool(bool(v))
        if isinstance(v, str):
            return String(str.__str__(v))
        if isinstance(v, (bytes, bytearray, memoryview)):
            return String(bytes(v).decode("utf-8", "backslashreplace"))
        if isinstance(v, numbers.Integral):
            return _integral(v)
        if isinstance(v, numbers.Real):
            return Float64(float(v))
        if isinstance(v, numbers.Number):
            return _default_format(v)

        options = self.registry.lookup(type(v))
        if options is not None or _is_declared_aggregate(v):
            return self._aggregate(v, options, state)
        if isinstance(v, Mapping):
            return self._mapping(v, state)
        if isinstance(v, Set):
            return self._set(v, state)
        if isinstance(v, Sequence):
            return List(tuple(self._encode(item, state) for item in v))
        if _is_plain_object(v):
            return self._aggregate(v, None, state)

        return _default_format(v)

    def _mapping(self, v: Mapping, state: _EncodeState) -> Value:
        try:
            items = list(v.items())
        except InvariantViolation:
            raise
        except Exception:
            return _default_format(v)
        m = Map.from_pairs(
            (_format_str(k), self._encode(item, state)) for k, item in items
        )
        return m.sorted()

    def _set(self, v: Set, state: _EncodeState) -> Value:
        # Ties on the formatted string are broken by type and encoding,
        # never by iteration order.
        encoded = [
            (_format_str(item), type(item).__name__, self._encode(item, state))
            for item in v
        ]
        encoded.sort(key=lambda e: (e[0], e[1], repr(e[2])))
        return List(tuple(e[2] for e in encoded))

    def _aggregate(
        self, v: Any, options: Optional[TypeOptions], state: _EncodeState
    ) -> Map:
        proto = is_proto_message(v)
        attrs, declared = _attributes(v, options, proto)
        include_private = declared or (options is not None and options.private)

        fields: PyList[Field] = []
        for attr in attrs:
            if attr.startswith("__"):
                continue
            if attr.startswith("_") and not include_private:
                continue
            if proto and attr.startswith(PROTO_INTERNAL_PREFIX):
                continue
            fo = options.options_for(attr) if options is not None else _DEFAULT_FIELD
            if fo.exclude:
                continue

            try:
                raw = getattr(v, attr)
            except AttributeError:
                # Unset slot or a property that doesn't apply.
                continue
            except InvariantViolation:
                raise
            except Exception as e:
                encoded: Value = Map((Field("attribute_error", String(error_message(e))),))
            else:
                encoded = self._encode(raw, state)

            if fo.embed and isinstance(encoded, Map):
                fields.extend(encoded.fields)
                continue

            name = fo.name if fo.name is not None else snakecase(attr)
            fields.append(Field(name, encoded))

        return Map(tuple(fields))


def _integral(v: Any) -> Value:
    n = int(v)
    # numpy and friends expose unsigned integers through dtype.kind.
    if getattr(getattr(v, "dtype", None), "kind", None) == "u" and n <= UINT64_MAX:
        return Uint64(n)
    return int_value(n)


def _is_namedtuple(v: Any) -> bool:
    return isinstance(v, tuple) and hasattr(type(v), "_fields")


def _is_declared_aggregate(v: Any) -> bool:
    """Aggregates whose field list and order come from the type itself."""
    return (
        (dataclasses.is_dataclass(v) and not isinstance(v, type))
        or is_pydantic_model(v)
        or is_proto_message(v)
        or _is_namedtuple(v)
    )


def _is_plain_object(v: Any) -> bool:
    typ = type(v)
    if typ.__module__ == "builtins" or inspect.isclass(v) or inspect.isroutine(v):
        return False
    return hasattr(v, "__dict__") or any("__slots__" in vars(k) for k in typ.__mro__)


def _attributes(
    v: Any, options: Optional[TypeOptions], proto: bool
) -> Tuple[Tuple[str, ...], bool]:
    """
    Return the attribute names of an aggregate in declaration order, and
    whether they come from a declared schema (which includes private ones).
    """
    typ = type(v)
    if options is not None and options.attributes is not None:
        return options.attributes, True
    if proto:
        return tuple(f.name for f in typ.DESCRIPTOR.fields), True
    if dataclasses.is_dataclass(v):
        return tuple(f.name for f in dataclasses.fields(v)), True
    if is_pydantic_model(v):
        return tuple(typ.model_fields), True
    if _is_namedtuple(v):
        return tuple(typ._fields), True

    names: PyList[str] = []
    for klass in reversed(typ.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    names.extend(getattr(v, "__dict__", {}))
    return tuple(dict.fromkeys(names)), False


def _format_str(v: Any) -> str:
    try:
        return str(v)
    except Exception:
        try:
            return repr(v)
        except Exception:
            return f"<unformattable {type(v).__name__}>"


def _default_format(v: Any) -> String:
    return String(_format_str(v))


default_encoder = Encoder()


def encode(v: Any) -> Value:
    """Encode v with the default encoder."""
    return default_encoder.encode(v)


def encode_fields(fields: M) -> Map:
    """Encode an ordered field collection with the default encoder."""
    return default_encoder.encode_fields(fields)
