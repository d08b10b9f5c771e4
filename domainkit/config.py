"""Library configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Library settings, read from ``DOMAINKIT_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOMAINKIT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: LogLevel | None = None

    # Identity snapshots
    EMIT_LEGACY_KEY_ALIAS: bool = True

    # Structural engine
    MAX_STRUCTURE_DEPTH: int = 500

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept lower-case level names."""
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    @field_validator("MAX_STRUCTURE_DEPTH", mode="after")
    @classmethod
    def validate_max_depth(cls, value: int) -> int:
        """Depth limit must leave room for at least one level of nesting."""
        if value < 1:
            msg = "MAX_STRUCTURE_DEPTH must be a positive integer"
            raise ValueError(msg)
        return value

    @property
    def log_level(self) -> int:
        """Effective stdlib logging level."""
        if self.LOG_LEVEL is not None:
            return logging.getLevelNamesMapping()[self.LOG_LEVEL]
        return logging.DEBUG if self.ENVIRONMENT == "development" else logging.INFO


def configure_logging(environment: str = "development", level: int | None = None) -> None:
    """
    Route structlog through stdlib logging.

    Production renders JSON lines; every other environment gets the
    human-readable console renderer. ``level`` defaults to DEBUG in
    development and INFO elsewhere.
    """
    if level is None:
        level = logging.DEBUG if environment == "development" else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: "Settings | None" = None) -> None:
    """Configure logging using the environment and level from settings."""
    settings = settings or get_settings()
    configure_logging(settings.ENVIRONMENT, settings.log_level)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
