"""Filter, FilterChain and ResourceTransport interfaces.

These interfaces define the chain-of-responsibility used for every resource
call. Filters run in the order they were configured; each one may rewrite the
request, delegate to the remainder of the chain, and post-process the result.
The terminal link of every chain is a ResourceTransport.

Example Usage:
    ```python
    class TimingFilter(Filter):
        def filter(
            self, request: ResourceDataRequest, chain: FilterChain
        ) -> ResourceDataResult:
            start = time.perf_counter()
            result = chain.filter(request)
            elapsed = time.perf_counter() - start
            ...
            return result
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from apikeyguard.domain.models.resource_data import (
        ResourceDataRequest,
        ResourceDataResult,
    )


class FilterChain(ABC):
    """The remainder of a filter chain as seen from inside a filter."""

    @abstractmethod
    def filter(self, request: ResourceDataRequest) -> ResourceDataResult:
        """Continue processing ``request`` with the next link of the chain.

        Args:
            request: Request to hand to the next filter (or the transport).

        Returns:
            ResourceDataResult produced further down the chain.

        Raises:
            TransportError: Propagated unchanged from the terminal transport.
        """
        ...


class Filter(ABC):
    """A single link in the resource filter chain.

    Implementations must call ``chain.filter(request)`` to continue, or return
    a result of their own to short-circuit. Filters must not keep per-request
    state on ``self``: one instance serves concurrent calls.
    """

    @abstractmethod
    def filter(self, request: ResourceDataRequest, chain: FilterChain) -> ResourceDataResult:
        """Process ``request``, delegating to ``chain`` to continue.

        Args:
            request: The request as rewritten by the preceding filters.
            chain: Remainder of the chain.

        Returns:
            The (possibly decorated) result.
        """
        ...


class ResourceTransport(ABC):
    """Terminal link of the chain: dispatches the request to the service."""

    @abstractmethod
    def execute(self, request: ResourceDataRequest) -> ResourceDataResult:
        """Send ``request`` and decode the response payload.

        Args:
            request: Fully filtered request.

        Returns:
            ResourceDataResult carrying the decoded payload.

        Raises:
            TransportError: If the call fails for any reason.
        """
        ...


@runtime_checkable
class FilterProtocol(Protocol):
    """Structural type for filters that do not subclass :class:`Filter`."""

    def filter(self, request: ResourceDataRequest, chain: FilterChain) -> ResourceDataResult:
        """Process ``request``."""
        ...
