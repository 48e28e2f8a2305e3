"""
Exceptions raised by logtree.
"""

from logtree.core.exceptions.custom_exceptions import (
    ChainProtocolError,
    ConfigurationError,
    InvariantViolation,
    LogTreeError,
    RenderError,
    SinkError,
)

__all__ = [
    "LogTreeError",
    "ConfigurationError",
    "InvariantViolation",
    "ChainProtocolError",
    "RenderError",
    "SinkError",
]
