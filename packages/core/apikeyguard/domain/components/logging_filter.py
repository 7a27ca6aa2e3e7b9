"""LoggingFilter: structured logging around each resource call."""

import time
from typing import Any

import structlog

from apikeyguard.domain.interfaces.filter import Filter, FilterChain
from apikeyguard.domain.models.resource_data import ResourceDataRequest, ResourceDataResult

_logger = structlog.get_logger(__name__)


class LoggingFilter(Filter):
    """Log completion or failure of every call with its duration.

    Only the action, path and resource kind are logged; query values and
    payloads never are.
    """

    def __init__(self, logger: Any | None = None) -> None:
        """Initialize LoggingFilter.

        Args:
            logger: structlog-style logger. Defaults to the module logger.
        """
        self._logger = logger or _logger

    def filter(self, request: ResourceDataRequest, chain: FilterChain) -> ResourceDataResult:
        start = time.perf_counter()
        try:
            result = chain.filter(request)
        except Exception as e:
            self._logger.error(
                "resource_request.failed",
                action=request.action.value,
                path=request.uri.absolute_path,
                resource_kind=request.resource_kind.value,
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        self._logger.info(
            "resource_request.completed",
            action=request.action.value,
            path=request.uri.absolute_path,
            resource_kind=request.resource_kind.value,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return result
