"""
Per-type logging metadata supplied when a type is registered.

Field renames, exclusions and embedding are declared next to the type with
the loggable decorator (or register for types you don't own) instead of
being inferred from the type itself. Registering a type is also how it opts
into introspection of its private (underscore prefixed) attributes.

Example:
    >>> @loggable(fields={"password": exclude(), "host_name": "host"}, private=True)
    ... class Conn:
    ...     def __init__(self):
    ...         self.host_name = "db1"
    ...         self.password = "hunter2"
    ...         self._retries = 3
    >>> encode(Conn())   # Map(host: db1, retries: 3)
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class FieldOptions:
    """
    How one attribute of a registered type is logged.

    Attributes:
        name: Output name, replacing the derived snake_case name
        exclude: Skip the attribute entirely
        embed: Splice the attribute's own fields into the parent Map
    """

    name: Optional[str] = None
    exclude: bool = False
    embed: bool = False


def exclude() -> FieldOptions:
    return FieldOptions(exclude=True)


def rename(name: str) -> FieldOptions:
    return FieldOptions(name=name)


def embed() -> FieldOptions:
    return FieldOptions(embed=True)


FieldSpec = Union[FieldOptions, str]


@dataclass(frozen=True)
class TypeOptions:
    """
    Logging metadata of a registered type.

    Attributes:
        fields: Options keyed by attribute name
        private: Whether underscore prefixed attributes are logged
        attributes: Explicit attribute order, for types whose attributes
            can't be discovered in declaration order
    """

    fields: Mapping[str, FieldOptions] = field(default_factory=dict)
    private: bool = False
    attributes: Optional[Tuple[str, ...]] = None

    def options_for(self, attr: str) -> FieldOptions:
        return self.fields.get(attr, _DEFAULT_FIELD)


_DEFAULT_FIELD = FieldOptions()


def _normalize(fields: Optional[Mapping[str, FieldSpec]]) -> Dict[str, FieldOptions]:
    normalized: Dict[str, FieldOptions] = {}
    for attr, option in (fields or {}).items():
        if isinstance(option, str):
            option = rename(option)
        elif not isinstance(option, FieldOptions):
            raise TypeError(
                f"options for field {attr!r} must be FieldOptions or str, "
                f"got {type(option).__name__}"
            )
        normalized[attr] = option
    return normalized


class TypeRegistry:
    """Maps types to their TypeOptions. Lookups honor inheritance."""

    def __init__(self) -> None:
        self._types: Dict[type, TypeOptions] = {}
        self._lock = threading.Lock()

    def register(
        self,
        cls: type,
        fields: Optional[Mapping[str, FieldSpec]] = None,
        private: bool = False,
        attributes: Optional[Sequence[str]] = None,
    ) -> type:
        options = TypeOptions(
            fields=_normalize(fields),
            private=private,
            attributes=tuple(attributes) if attributes is not None else None,
        )
        with self._lock:
            self._types[cls] = options
        return cls

    def unregister(self, cls: type) -> None:
        with self._lock:
            self._types.pop(cls, None)

    def lookup(self, cls: type) -> Optional[TypeOptions]:
        """
        Merge the options registered for cls and its bases.

        Options of a subclass win over those of its bases. Returns None when
        no class in the MRO is registered.
        """
        with self._lock:
            registered = [self._types[k] for k in reversed(cls.__mro__) if k in self._types]
        if not registered:
            return None

        fields: Dict[str, FieldOptions] = {}
        private = False
        attributes = None
        for options in registered:
            fields.update(options.fields)
            private = private or options.private
            if options.attributes is not None:
                attributes = options.attributes
        return TypeOptions(fields=fields, private=private, attributes=attributes)


default_registry = TypeRegistry()


def register(
    cls: type,
    fields: Optional[Mapping[str, FieldSpec]] = None,
    private: bool = False,
    attributes: Optional[Sequence[str]] = None,
    registry: Optional[TypeRegistry] = None,
) -> type:
    """Register logging metadata for a type you can't decorate."""
    return (registry or default_registry).register(
        cls, fields=fields, private=private, attributes=attributes
    )


def loggable(
    cls: Optional[type] = None,
    *,
    fields: Optional[Mapping[str, FieldSpec]] = None,
    private: bool = False,
    attributes: Optional[Sequence[str]] = None,
    registry: Optional[TypeRegistry] = None,
):
    """
    Class decorator registering logging metadata.

    Usable bare (@loggable) or with options (@loggable(private=True)).
    """

    def wrap(klass: type) -> type:
        return register(
            klass,
            fields=fields,
            private=private,
            attributes=attributes,
            registry=registry,
        )

    if cls is None:
        return wrap
    return wrap(cls)
