"""Filter chain engine for resource calls."""

from __future__ import annotations

from collections.abc import Sequence

from apikeyguard.domain.interfaces.filter import (
    Filter,
    FilterChain,
    FilterProtocol,
    ResourceTransport,
)
from apikeyguard.domain.models.resource_data import ResourceDataRequest, ResourceDataResult


class DefaultFilterChain(FilterChain):
    """Executes an ordered list of filters ending in a transport.

    The chain holds only its configuration. Every call to :meth:`filter`
    walks the filters with a fresh cursor, so one chain can be reused and
    shared between threads.

    Example:
        ```python
        chain = DefaultFilterChain(
            [LoggingFilter(), ApiKeyQueryFilter()],
            transport=HttpResourceTransport(base_url="https://api.example.com/v1"),
        )
        result = chain.filter(request)
        ```
    """

    def __init__(
        self,
        filters: Sequence[Filter | FilterProtocol],
        transport: ResourceTransport,
    ) -> None:
        """Initialize DefaultFilterChain.

        Args:
            filters: Filters in execution order. May be empty.
            transport: Terminal link invoked after the last filter.

        Raises:
            TypeError: If an element does not provide a ``filter`` method.
        """
        for candidate in filters:
            if not isinstance(candidate, (Filter, FilterProtocol)):
                raise TypeError(f"Not a filter: {candidate!r}")
        self._filters: tuple[Filter | FilterProtocol, ...] = tuple(filters)
        self._transport = transport

    @property
    def filters(self) -> tuple[Filter | FilterProtocol, ...]:
        """Configured filters in execution order."""
        return self._filters

    @property
    def transport(self) -> ResourceTransport:
        """Terminal transport."""
        return self._transport

    def filter(self, request: ResourceDataRequest) -> ResourceDataResult:
        """Run ``request`` through every filter and the transport."""
        return _ChainCursor(self._filters, self._transport, 0).filter(request)


class _ChainCursor(FilterChain):
    """Position inside a running chain; handed to each filter as its ``chain``."""

    def __init__(
        self,
        filters: tuple[Filter | FilterProtocol, ...],
        transport: ResourceTransport,
        index: int,
    ) -> None:
        self._filters = filters
        self._transport = transport
        self._index = index

    def filter(self, request: ResourceDataRequest) -> ResourceDataResult:
        if self._index >= len(self._filters):
            return self._transport.execute(request)
        current = self._filters[self._index]
        remainder = _ChainCursor(self._filters, self._transport, self._index + 1)
        return current.filter(request, remainder)
