"""
Exception hierarchy for logtree.

The encode and render pipeline is designed to never raise for application
data: odd values degrade to a fallback representation instead. The
exceptions defined here cover the few conditions that are not data problems:
broken integrations, bad configuration and sink failures.

Exception Hierarchy:
    LogTreeError (base)
    ├── ConfigurationError: Invalid settings or logger construction
    ├── InvariantViolation: Internal contract broken by an integration
    │   └── ChainProtocolError: format_error wrote too many frame pieces
    ├── RenderError: A renderer was handed something that is not a Value
    └── SinkError: A sink failed to write or sync an entry

Example:
    >>> raise ChainProtocolError(
    ...     "unexpected write from format_error",
    ...     details={"text": "extra", "frame": 2},
    ... )
"""

from typing import Any, Dict, Optional


class LogTreeError(Exception):
    """
    Base exception class for all logtree errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code defaults to the class name when not specified.

    Example:
        >>> raise LogTreeError(
        ...     "sink failed",
        ...     error_code="SINK_WRITE_ERROR",
        ...     details={"sink": "HumanSink"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(LogTreeError):
    """
    Raised when settings cannot be turned into a working logger.

    Common scenarios:
        - Unknown output format
        - Log file path that cannot be opened
    """

    pass


class InvariantViolation(LogTreeError):
    """
    Raised when code integrating with logtree breaks an internal contract.

    Unlike malformed application data, which the encoder always absorbs,
    an invariant violation means the integration itself is buggy. The
    encoder re-raises these from every fallback path so they surface to
    the caller instead of being folded into the log output.
    """

    pass


class ChainProtocolError(InvariantViolation):
    """
    Raised when a format_error implementation writes more than three
    positional pieces of text (message, function, location) for one frame.
    """

    pass


class RenderError(LogTreeError):
    """Raised when a renderer is handed a node that is not a Value"""

    pass


class SinkError(LogTreeError):
    """Raised when a sink fails to write or sync an entry"""

    pass
