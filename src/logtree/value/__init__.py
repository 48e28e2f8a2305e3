"""
Value model and wild-field helpers.
"""

from logtree.value.fields import F, M, error
from logtree.value.model import (
    NULL,
    Bool,
    Field,
    Float64,
    Int64,
    List,
    Map,
    Null,
    String,
    Uint64,
    Value,
    from_json,
    int_value,
    is_scalar,
)

__all__ = [
    "Value",
    "Null",
    "NULL",
    "Bool",
    "Int64",
    "Uint64",
    "Float64",
    "String",
    "Field",
    "Map",
    "List",
    "from_json",
    "int_value",
    "is_scalar",
    "F",
    "M",
    "error",
]
