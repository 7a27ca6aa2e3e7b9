"""Configuration settings using pydantic-settings."""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from apikeyguard.domain.models.api_key_parameter import (
    DEFAULT_ENCRYPTION_ITERATIONS,
    DEFAULT_ENCRYPTION_SIZE,
)


class GuardSettings(BaseSettings):
    """Configuration settings for apikeyguard.

    Settings can be loaded from environment variables or passed as a dictionary.
    Environment variables are prefixed with 'APIKEYGUARD_'
    (e.g., APIKEYGUARD_BASE_URL=https://api.example.com/v1).

    Example:
        ```python
        # From environment variables
        settings = GuardSettings()

        # From dictionary
        settings = GuardSettings(filters=["logging", "api_key_query"])
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="APIKEYGUARD_",
        case_sensitive=False,
        extra="ignore",
    )

    # Transport configuration
    base_url: str = Field(
        default="http://localhost:8080/v1",
        description="Base URL resource paths are resolved against",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout of a single resource call in seconds",
        gt=0,
    )

    # Encryption envelope configuration
    encryption_key_size: int = Field(
        default=DEFAULT_ENCRYPTION_SIZE,
        description="Key size in bits requested when the envelope is added",
    )
    encryption_key_iterations: int = Field(
        default=DEFAULT_ENCRYPTION_ITERATIONS,
        description="PBKDF2 iterations requested when the envelope is added",
        gt=0,
    )
    salt_size_bytes: int = Field(
        default=32,
        description="Random bytes per generated salt",
        ge=16,
    )

    # Filter chain configuration
    filters: list[str] = Field(
        default_factory=lambda: ["api_key_query"],
        description="Filter names in execution order",
    )

    # Observability configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False for console output)",
    )

    @field_validator("encryption_key_size")
    @classmethod
    def validate_encryption_key_size(cls, v: int) -> int:
        """Only AES key sizes are accepted."""
        if v not in (128, 192, 256):
            raise ValueError(f"encryption_key_size must be 128, 192 or 256, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v!r}")
        return level

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "GuardSettings":
        """Create settings from a dictionary.

        Args:
            config: Dictionary with configuration values.

        Returns:
            GuardSettings instance.
        """
        return cls(**config)
