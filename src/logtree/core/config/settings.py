"""
Configuration for loggers built from the environment.

Settings are loaded with pydantic-settings from environment variables and an
optional .env file. They only matter to make_from_settings and to the
diagnostics logging of logtree itself; loggers built directly with make()
ignore them.

Classes:
    Settings: Logger and diagnostics configuration

Environment Variables:
    Every attribute can be overridden by an environment variable of the same
    name (case-sensitive).

Example:
    >>> from logtree.core.config.settings import Settings
    >>> settings = Settings(LOG_FORMAT="json")
    >>> settings.LOG_LEVEL
    'INFO'
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ["DEBUG", "INFO", "WARN", "ERROR", "CRITICAL", "FATAL"]
LOG_FORMATS = ["human", "json"]
DIAGNOSTICS_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DIAGNOSTICS_FORMATS = ["json", "text"]


class Settings(BaseSettings):
    """
    Logger settings with environment variable support.

    Attributes:
        LOG_LEVEL: Minimum level of entries passed to sinks
        LOG_FORMAT: Sink format (human/json)
        LOG_FILE_PATH: Write entries to this file instead of stderr
        FORCE_COLOR: Color human output even when not writing to a terminal

        DIAGNOSTICS_LEVEL: Level of logtree's own diagnostic messages
        DIAGNOSTICS_FORMAT: Format of diagnostic messages (json/text)
    """

    # Logger
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "human"
    LOG_FILE_PATH: Optional[str] = None
    FORCE_COLOR: bool = False

    # Diagnostics
    DIAGNOSTICS_LEVEL: str = "WARNING"
    DIAGNOSTICS_FORMAT: str = "text"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate the logger level and normalize it to uppercase.

        WARNING is accepted as an alias of WARN.

        Raises:
            ValueError: If the level is not supported
        """
        level = v.upper()
        if level == "WARNING":
            level = "WARN"
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {LOG_LEVELS}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of: {LOG_FORMATS}")
        return fmt

    @field_validator("DIAGNOSTICS_LEVEL")
    @classmethod
    def validate_diagnostics_level(cls, v: str) -> str:
        """
        Validate the diagnostics level is a standard logging level.

        Raises:
            ValueError: If the level is not supported
        """
        level = v.upper()
        if level not in DIAGNOSTICS_LEVELS:
            raise ValueError(f"DIAGNOSTICS_LEVEL must be one of: {DIAGNOSTICS_LEVELS}")
        return level

    @field_validator("DIAGNOSTICS_FORMAT")
    @classmethod
    def validate_diagnostics_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in DIAGNOSTICS_FORMATS:
            raise ValueError(
                f"DIAGNOSTICS_FORMAT must be one of: {DIAGNOSTICS_FORMATS}"
            )
        return fmt

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
