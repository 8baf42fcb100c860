"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Import defaults (time zone, locale, charset) live here so callers can omit them

Usage:
    from src.core.config import get_settings

    settings = get_settings()
    zone_name = settings.import_default_timezone
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment


class Settings(BaseSettings):
    """
    Application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Statement import defaults
    import_default_timezone: str = Field(
        default="UTC",
        description="IANA time zone used when an import request does not name one",
    )
    import_default_locale: str = Field(
        default="pt-BR",
        description="Locale tag used for CSV number parsing when none is configured",
    )
    import_default_charset: str = Field(
        default="utf-8",
        description="Character set used to decode CSV statements by default",
    )
    import_max_ignore_descriptions: int = Field(
        default=100,
        description="Maximum number of entries accepted in an ignore-list",
    )
    import_progress_log_interval: int = Field(
        default=100,
        description="Emit an import progress log line every N entries",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("import_default_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """
        Validate the default import time zone.

        Args:
            v: IANA time zone name.

        Returns:
            str: The validated zone name.

        Raises:
            ValueError: If the zone is unknown.
        """
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level name."""
        return v.upper()

    @field_validator("import_max_ignore_descriptions", "import_progress_log_interval")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v < 1:
            raise ValueError("value must be a positive integer")
        return v

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        """
        Check if running in CI environment.

        Returns:
            bool: True if environment is CI, False otherwise.
        """
        return self.environment == Environment.CI

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings (cached).
    """
    return Settings()
