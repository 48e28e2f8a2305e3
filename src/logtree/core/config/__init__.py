"""Configuration for loggers built from the environment."""

from logtree.core.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
