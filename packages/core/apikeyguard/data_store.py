"""ResourceDataStore - entry point that runs resource calls through the filter chain."""

from collections.abc import Callable, Sequence
from typing import Any

from apikeyguard.domain.components.api_key_query_filter import ApiKeyQueryFilter
from apikeyguard.domain.components.filter_chain import DefaultFilterChain
from apikeyguard.domain.components.logging_filter import LoggingFilter
from apikeyguard.domain.interfaces.filter import Filter, FilterProtocol, ResourceTransport
from apikeyguard.domain.models.canonical_uri import CanonicalUri, QueryString
from apikeyguard.domain.models.resource_data import (
    ResourceAction,
    ResourceDataRequest,
    ResourceDataResult,
)
from apikeyguard.infrastructure.adapters.http_transport import HttpResourceTransport
from apikeyguard.infrastructure.config.file_loader import ConfigurationError
from apikeyguard.infrastructure.config.settings import GuardSettings
from apikeyguard.infrastructure.observability.logger import configure_logging
from apikeyguard.infrastructure.utils.salt import DefaultSaltGenerator

FilterFactory = Callable[[GuardSettings], Filter]


def _api_key_query_filter(settings: GuardSettings) -> Filter:
    return ApiKeyQueryFilter(
        salt_generator=DefaultSaltGenerator(salt_size_bytes=settings.salt_size_bytes),
        default_key_size=settings.encryption_key_size,
        default_key_iterations=settings.encryption_key_iterations,
    )


FILTER_REGISTRY: dict[str, FilterFactory] = {
    "api_key_query": _api_key_query_filter,
    "logging": lambda settings: LoggingFilter(),
}


class ResourceDataStore:
    """Main entry point of the library.

    Builds the filter chain declared in configuration and runs every
    resource call through it, ending in the transport.

    Example:
        ```python
        # Defaults from environment; HTTP transport against settings.base_url
        store = ResourceDataStore()

        # Explicit configuration and transport
        store = ResourceDataStore(
            transport=my_transport,
            config={"filters": ["logging", "api_key_query"]},
        )

        result = store.read("/accounts/abc/apiKeys", ApiKeyList)
        keys = ApiKeyList.from_resource_data(result.data)
        ```
    """

    def __init__(
        self,
        transport: ResourceTransport | None = None,
        config: GuardSettings | dict[str, Any] | None = None,
        filters: Sequence[Filter | FilterProtocol] | None = None,
    ) -> None:
        """Initialize ResourceDataStore with dependencies.

        Args:
            transport: Terminal transport. Defaults to HttpResourceTransport
                using ``base_url`` and ``request_timeout_seconds``.
            config: Configuration. Can be:
                   - GuardSettings instance
                   - Dictionary with configuration values
                   - None (loads from environment variables)
            filters: Explicit filter instances. When given, ``config.filters``
                is ignored.

        Raises:
            ValueError: If configuration type is invalid.
            ConfigurationError: If a configured filter name is unknown.
        """
        if config is None:
            self._config = GuardSettings()
        elif isinstance(config, dict):
            self._config = GuardSettings.from_dict(config)
        elif isinstance(config, GuardSettings):
            self._config = config
        else:
            raise ValueError(
                f"Invalid config type: {type(config)}. Expected GuardSettings, dict, or None"
            )

        configure_logging(log_level=self._config.log_level, json_format=self._config.json_logs)

        self._owned_transport: HttpResourceTransport | None = None
        if transport is None:
            transport = HttpResourceTransport(
                base_url=self._config.base_url,
                timeout=self._config.request_timeout_seconds,
            )
            self._owned_transport = transport

        if filters is None:
            filters = self.build_filters(self._config)

        self._chain = DefaultFilterChain(filters, transport)

    @staticmethod
    def build_filters(settings: GuardSettings) -> list[Filter]:
        """Instantiate the configured filters in their declared order.

        Raises:
            ConfigurationError: If a filter name is not registered.
        """
        built = []
        for idx, name in enumerate(settings.filters):
            factory = FILTER_REGISTRY.get(name)
            if factory is None:
                raise ConfigurationError(
                    f"Unknown filter '{name}'. Known filters: {', '.join(sorted(FILTER_REGISTRY))}",
                    field=f"filters[{idx}]",
                )
            built.append(factory(settings))
        return built

    def close(self) -> None:
        """Close the HTTP transport if this store created it."""
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> "ResourceDataStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def config(self) -> GuardSettings:
        return self._config

    @property
    def chain(self) -> DefaultFilterChain:
        return self._chain

    def execute(self, request: ResourceDataRequest) -> ResourceDataResult:
        """Run ``request`` through the filter chain."""
        return self._chain.filter(request)

    def create(
        self,
        path: str,
        resource_class: type,
        data: dict[str, Any],
        query: QueryString | dict[str, Any] | None = None,
    ) -> ResourceDataResult:
        """Create a resource under ``path``."""
        return self.execute(self._request(ResourceAction.Create, path, resource_class, query, data))

    def read(
        self,
        path: str,
        resource_class: type,
        query: QueryString | dict[str, Any] | None = None,
    ) -> ResourceDataResult:
        """Read the resource or collection at ``path``."""
        return self.execute(self._request(ResourceAction.Read, path, resource_class, query))

    def update(
        self,
        path: str,
        resource_class: type,
        data: dict[str, Any],
        query: QueryString | dict[str, Any] | None = None,
    ) -> ResourceDataResult:
        """Update the resource at ``path``."""
        return self.execute(self._request(ResourceAction.Update, path, resource_class, query, data))

    def delete(self, path: str, resource_class: type) -> ResourceDataResult:
        """Delete the resource at ``path``."""
        return self.execute(self._request(ResourceAction.Delete, path, resource_class))

    @staticmethod
    def _request(
        action: ResourceAction,
        path: str,
        resource_class: type,
        query: QueryString | dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> ResourceDataRequest:
        # Filters mutate the query in place; the caller keeps its own object.
        if query is not None:
            query = query.copy() if isinstance(query, QueryString) else QueryString(query)
        uri = CanonicalUri(absolute_path=path, query=query)
        return ResourceDataRequest(action=action, uri=uri, resource_class=resource_class, data=data)
