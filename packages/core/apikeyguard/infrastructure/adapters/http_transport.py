"""HTTP transport: terminal link of the filter chain, built on httpx."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from apikeyguard.domain.interfaces.filter import ResourceTransport
from apikeyguard.domain.models.resource_data import (
    ResourceAction,
    ResourceDataRequest,
    ResourceDataResult,
)
from apikeyguard.domain.models.system_error import ErrorCategory, TransportError

logger = structlog.get_logger(__name__)

_METHODS: dict[ResourceAction, str] = {
    ResourceAction.Create: "POST",
    ResourceAction.Read: "GET",
    ResourceAction.Update: "POST",
    ResourceAction.Delete: "DELETE",
}


class HttpResourceTransport(ResourceTransport):
    """Dispatches resource requests over HTTP and decodes JSON responses.

    Request signing is not performed here; pass a pre-configured
    ``httpx.Client`` (auth, headers) when the service requires it.

    Example:
        ```python
        transport = HttpResourceTransport(base_url="https://api.example.com/v1")
        result = transport.execute(request)
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize HttpResourceTransport.

        Args:
            base_url: Base URL relative resource paths are resolved against.
            timeout: Request timeout in seconds (ignored when ``client`` is given).
            client: Optional pre-configured httpx client. Its lifecycle stays
                with the caller.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpResourceTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def build_url(self, request: ResourceDataRequest) -> str:
        """Resolve the request path against ``base_url``."""
        path = request.uri.absolute_path
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def execute(self, request: ResourceDataRequest) -> ResourceDataResult:
        """Send the request and decode the JSON payload.

        Raises:
            TransportError: On HTTP error status, timeout, network failure,
                any other httpx error or a response that is not a JSON object.
        """
        method = _METHODS[request.action]
        url = self.build_url(request)
        params = dict(request.query) if request.query else None
        json_body = request.data if method == "POST" else None

        try:
            response = self._client.request(method, url, params=params, json=json_body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self.map_error(e) from e
        except httpx.TimeoutException as e:
            raise TransportError(
                category=ErrorCategory.TimeoutError,
                message=f"{method} {url} timed out after {self.timeout}s",
                retryable=True,
            ) from e
        except httpx.NetworkError as e:
            raise TransportError(
                category=ErrorCategory.NetworkError,
                message=f"Network error calling {method} {url}: {e}",
                retryable=True,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                category=ErrorCategory.UnknownError,
                message=f"HTTP error calling {method} {url}: {e}",
            ) from e

        data = self._decode(response)
        logger.debug("http_transport.response", method=method, url=url, status=response.status_code)
        return ResourceDataResult(
            action=request.action,
            uri=request.uri,
            resource_class=request.resource_class,
            data=data,
        )

    def map_error(self, error: httpx.HTTPStatusError) -> TransportError:
        """Map an HTTP status error to a TransportError."""
        status_code = error.response.status_code
        if status_code in (401, 403):
            category, retryable = ErrorCategory.AuthenticationError, False
        elif status_code == 404:
            category, retryable = ErrorCategory.NotFoundError, False
        elif status_code == 429:
            category, retryable = ErrorCategory.RateLimitError, True
        elif status_code in (400, 409, 422):
            category, retryable = ErrorCategory.ValidationError, False
        elif status_code >= 500:
            category, retryable = ErrorCategory.ServiceError, True
        else:
            category, retryable = ErrorCategory.UnknownError, False

        return TransportError(
            category=category,
            message=(
                f"Service returned {status_code} for "
                f"{error.request.method} {error.request.url.path}"
            ),
            status_code=status_code,
            retryable=retryable,
            details=self._extract_error_details(error.response),
        )

    @staticmethod
    def _extract_error_details(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        if response.status_code == 204 or not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                category=ErrorCategory.UnknownError,
                message=f"Response is not valid JSON: {e}",
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise TransportError(
                category=ErrorCategory.UnknownError,
                message="Response payload must be a JSON object",
                status_code=response.status_code,
            )
        return body
