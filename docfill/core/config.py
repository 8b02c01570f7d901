"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the package.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Content acquisition
    fetch_timeout_ms: int = Field(
        default=30000,
        gt=0,
        description="Per-attempt timeout for every retrieval strategy, in milliseconds.",
    )
    min_content_length: int = Field(
        default=0,
        ge=0,
        description="Responses shorter than this are recorded as failed attempts.",
    )
    include_proxy_strategy: bool = Field(
        default=False,
        description="Append the CORS proxy strategy to the default strategy table.",
    )
    proxy_base_url: str = Field(
        default="https://api.allorigins.win/get",
        description="Base URL of the JSON-wrapping CORS proxy.",
    )

    # Placeholder extraction
    max_matches_per_pattern: int = Field(
        default=100,
        gt=0,
        description="Upper bound on matches taken from one pattern over one source.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_format: str = Field(
        default="json",
        description="Structured log rendering: 'json' or 'console'.",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Optional directory for info.log and error.log files.",
    )
    debug_log_capacity: int = Field(
        default=1000,
        gt=0,
        description="Number of entries retained by the in-memory debug log.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Accept only the renderers structlog is configured for."""
        v = v.lower().strip()
        if v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        from docfill.core.logging_config import setup_logging

        level = getattr(logging, self.log_level, logging.INFO)

        renderer = (
            structlog.dev.ConsoleRenderer()
            if self.log_format == "console"
            else structlog.processors.JSONRenderer()
        )

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        setup_logging(level=level, log_dir=self.log_dir)

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
