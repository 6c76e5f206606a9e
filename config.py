"""
Configuration management using Pydantic Settings.
Schema limits and service settings are read from the environment once at import.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings with validation."""

    # Schema limits
    MAX_SLUG_LENGTH: int = Field(
        default=128,
        ge=1,
        description="Maximum length of audit, group, category and plugin slugs"
    )
    MAX_TITLE_LENGTH: int = Field(
        default=256,
        ge=1,
        description="Maximum length of a title"
    )
    MAX_DESCRIPTION_LENGTH: int = Field(
        default=65536,
        ge=1,
        description="Maximum length of a markdown description"
    )
    MAX_ISSUE_MESSAGE_LENGTH: int = Field(
        default=512,
        ge=1,
        description="Maximum length of an audit issue message"
    )

    # Frontend settings
    FRONTEND_ORIGIN: str = Field(
        default="http://localhost:3000",
        description="Frontend origin for CORS (no wildcard allowed)"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @field_validator("FRONTEND_ORIGIN")
    @classmethod
    def validate_no_wildcard_origin(cls, v: str) -> str:
        """Prevent wildcard CORS origin."""
        if v == "*":
            raise ValueError(
                "FRONTEND_ORIGIN cannot be '*' (wildcard). "
                "Set explicit origin or leave unset for localhost:3000 default."
            )
        return v


# Global settings instance
settings = Settings()
