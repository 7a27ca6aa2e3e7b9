"""Domain interfaces for dependency injection."""

from apikeyguard.domain.interfaces.filter import (
    Filter,
    FilterChain,
    FilterProtocol,
    ResourceTransport,
)
from apikeyguard.domain.interfaces.salt_generator import SaltGenerator

__all__ = [
    "Filter",
    "FilterChain",
    "FilterProtocol",
    "ResourceTransport",
    "SaltGenerator",
]
