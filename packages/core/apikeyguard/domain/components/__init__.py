"""Domain components for the resource filter chain."""

from apikeyguard.domain.components.api_key_query_filter import ApiKeyQueryFilter
from apikeyguard.domain.components.filter_chain import DefaultFilterChain
from apikeyguard.domain.components.logging_filter import LoggingFilter
from apikeyguard.domain.components.query_string_factory import QueryStringFactory

__all__ = [
    "ApiKeyQueryFilter",
    "DefaultFilterChain",
    "LoggingFilter",
    "QueryStringFactory",
]
