"""
logtree Logging Module - Diagnostics for logtree itself.

Structured diagnostics (sink failures, settings-driven logger construction)
are emitted with structlog under the "logtree" stdlib logger. They are
separate from the entries applications write through a logtree Logger.

Example:
    >>> from logtree.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("logger built", format="json", level="INFO")
"""

from logtree.core.logging.logger import DIAGNOSTICS_LOGGER, get_logger, setup_logging

__all__ = ["DIAGNOSTICS_LOGGER", "get_logger", "setup_logging"]
