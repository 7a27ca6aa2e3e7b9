"""Configuration infrastructure module."""

from apikeyguard.infrastructure.config.file_loader import (
    ConfigurationError,
    ConfigurationFileLoader,
)
from apikeyguard.infrastructure.config.settings import GuardSettings

__all__ = [
    "GuardSettings",
    "ConfigurationFileLoader",
    "ConfigurationError",
]
