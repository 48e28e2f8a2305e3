"""
Diagnostics logging for logtree itself.

logtree reports its own problems, such as a sink that failed to write an
entry, through structlog on top of the standard library logging module.
These diagnostics are kept apart from the entries applications log through
a logtree Logger: they go to stderr via the "logtree" stdlib logger and can
be routed or silenced with regular logging configuration.

Functions:
    setup_logging(): Configure structlog and the diagnostics handler
    get_logger(name): Get a diagnostics logger, configuring on first use

Configuration:
    Controlled by Settings:
    - DIAGNOSTICS_LEVEL: Minimum level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - DIAGNOSTICS_FORMAT: Output format (json/text)

Example:
    >>> from logtree.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("sink failed", sink="JSONSink", error="disk full")
"""

import logging
import sys
from typing import Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

from logtree.core.config.settings import Settings, get_settings

DIAGNOSTICS_LOGGER = "logtree"

_handler: Optional[logging.Handler] = None


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog and the handler of the "logtree" stdlib logger.

    Only the "logtree" logger hierarchy is touched so applications keep
    control of the root logger. Calling this again replaces the handler
    installed by the previous call.

    Args:
        settings: Settings to read the diagnostics level and format from.
            Loaded from the environment when omitted.

    Example:
        >>> from logtree.core.logging.logger import setup_logging
        >>> setup_logging(Settings(DIAGNOSTICS_LEVEL="DEBUG"))
    """
    global _handler
    settings = settings or get_settings()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.DIAGNOSTICS_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if settings.DIAGNOSTICS_FORMAT == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_level=False,
            show_path=False,
            markup=False,
        )
    handler.setFormatter(logging.Formatter("%(message)s"))

    diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
    if _handler is not None:
        diagnostics.removeHandler(_handler)
    diagnostics.addHandler(handler)
    diagnostics.setLevel(settings.DIAGNOSTICS_LEVEL)
    diagnostics.propagate = False
    _handler = handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a diagnostics logger.

    Args:
        name (str): Logger name, typically __name__ of the calling module,
            which places it under the "logtree" hierarchy

    Returns:
        structlog.stdlib.BoundLogger: Logger bound to name

    Note:
        Logging is configured from the environment on first use when
        setup_logging() hasn't been called yet.
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)
