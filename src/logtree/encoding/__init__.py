"""
logtree Encoding Module - From arbitrary values to Value trees.

Components:
    - Encoder / encode: Reflective encoder with capability dispatch
    - extract_chain / wrap: Wrapped error chains flattened into frames
    - loggable / register: Per-type field metadata and introspection opt-in
    - snakecase: Output name derivation for attributes
"""

from logtree.encoding.capabilities import (
    PROTO_INTERNAL_PREFIX,
    ChainFormatter,
    Lazy,
    LogValuer,
    Printer,
)
from logtree.encoding.chain import (
    CYCLE_MARKER,
    FramePrinter,
    WrappedError,
    extract_chain,
    wrap,
)
from logtree.encoding.encoder import Encoder, default_encoder, encode, encode_fields
from logtree.encoding.naming import snakecase, split_camel
from logtree.encoding.registry import (
    FieldOptions,
    TypeRegistry,
    default_registry,
    embed,
    exclude,
    loggable,
    register,
    rename,
)

__all__ = [
    "Encoder",
    "default_encoder",
    "encode",
    "encode_fields",
    "extract_chain",
    "wrap",
    "WrappedError",
    "FramePrinter",
    "CYCLE_MARKER",
    "Lazy",
    "LogValuer",
    "ChainFormatter",
    "Printer",
    "PROTO_INTERNAL_PREFIX",
    "FieldOptions",
    "TypeRegistry",
    "default_registry",
    "loggable",
    "register",
    "exclude",
    "rename",
    "embed",
    "snakecase",
    "split_camel",
]
