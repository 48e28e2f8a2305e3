"""
logtree - Structured logging values for humans and machines

logtree turns arbitrary application values into a canonical tree of
primitive values and renders that tree as YAML-like text for humans or as
JSON for machines. A small logger facade and a set of sinks are built
around that pipeline.

Modules:
    value: The Value model and wild field helpers (F, M)
    encoding: Reflective encoder, error chains and type registration
    rendering: Human and JSON renderers
    logger: Logger facade, levels and context fields
    sinks: Human, JSON and capture sinks
    core: Configuration, diagnostics logging and exceptions
    cli: Command-line interface tools

Example:
    >>> import sys
    >>> from logtree import F, HumanSink, make
    >>> log = make(HumanSink(sys.stderr)).named("worker")
    >>> log.info("job done", F("job", {"name": "nightly", "retries": 3}))
"""

__version__ = "0.1.0"
__description__ = (
    "Structured logging value pipeline: reflective encoding of arbitrary "
    "values into a canonical tree, rendered as human readable text or JSON."
)

from logtree.core.config.settings import Settings
from logtree.core.logging.logger import get_logger
from logtree.encoding import (
    Encoder,
    Lazy,
    WrappedError,
    embed,
    encode,
    encode_fields,
    exclude,
    extract_chain,
    loggable,
    register,
    rename,
    wrap,
)
from logtree.logger import (
    Level,
    Logger,
    Sink,
    SinkEntry,
    StdlibHandler,
    context_fields,
    helper,
    make,
    tee,
)
from logtree.rendering import quote_key, render, render_json, unquote_key
from logtree.sinks import CaptureSink, HumanSink, JSONSink, make_from_settings
from logtree.value import F, M, Value, error, from_json

__all__ = [
    "Settings",
    "get_logger",
    "Encoder",
    "Lazy",
    "WrappedError",
    "embed",
    "encode",
    "encode_fields",
    "exclude",
    "extract_chain",
    "loggable",
    "register",
    "rename",
    "wrap",
    "Level",
    "Logger",
    "Sink",
    "SinkEntry",
    "StdlibHandler",
    "context_fields",
    "helper",
    "make",
    "tee",
    "quote_key",
    "render",
    "render_json",
    "unquote_key",
    "CaptureSink",
    "HumanSink",
    "JSONSink",
    "make_from_settings",
    "F",
    "M",
    "Value",
    "error",
    "from_json",
]
