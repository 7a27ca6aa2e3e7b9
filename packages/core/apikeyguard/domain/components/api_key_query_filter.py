"""ApiKeyQueryFilter: keeps ApiKey secrets inside an encryption envelope.

Every read or write of an ApiKey (or an ApiKeyList) passes through this filter.
Before dispatch it makes sure the query carries the encryption envelope
(``encryptSecret``, ``encryptionKeySize``, ``encryptionKeyIterations`` and
``encryptionKeySalt``); after dispatch it echoes the effective envelope values
back onto each returned ApiKey as ``encryptionMetadata`` so that the secret
can later be decrypted.
"""

from __future__ import annotations

from typing import Any

import structlog

from apikeyguard.domain.components.query_string_factory import QueryStringFactory
from apikeyguard.domain.interfaces.filter import Filter, FilterChain
from apikeyguard.domain.interfaces.salt_generator import SaltGenerator
from apikeyguard.domain.models.api_key import ApiKeyList
from apikeyguard.domain.models.api_key_parameter import (
    DEFAULT_ENCRYPTION_ITERATIONS,
    DEFAULT_ENCRYPTION_SIZE,
    ENVELOPE_PARAMETERS,
    ApiKeyParameter,
)
from apikeyguard.domain.models.canonical_uri import CanonicalUri, QueryString
from apikeyguard.domain.models.criteria import build_criteria
from apikeyguard.domain.models.resource_data import (
    ResourceAction,
    ResourceDataRequest,
    ResourceDataResult,
    ResourceKind,
)
from apikeyguard.infrastructure.utils.salt import DefaultSaltGenerator
from apikeyguard.infrastructure.utils.validation import parse_int_parameter

logger = structlog.get_logger(__name__)

ENCRYPT_SECRET = ApiKeyParameter.ENCRYPT_SECRET.value
ENCRYPTION_KEY_SALT = ApiKeyParameter.ENCRYPTION_KEY_SALT.value
ENCRYPTION_KEY_SIZE = ApiKeyParameter.ENCRYPTION_KEY_SIZE.value
ENCRYPTION_KEY_ITERATIONS = ApiKeyParameter.ENCRYPTION_KEY_ITERATIONS.value
ENCRYPTION_METADATA = ApiKeyParameter.ENCRYPTION_METADATA.value


class ApiKeyQueryFilter(Filter):
    """Injects encryption criteria into ApiKey queries and decorates results.

    The filter is stateless apart from its collaborators, so a single
    instance may serve concurrent calls.

    Example:
        ```python
        api_key_filter = ApiKeyQueryFilter()
        chain = DefaultFilterChain([api_key_filter], transport)

        result = chain.filter(
            ResourceDataRequest(
                action=ResourceAction.Read,
                uri=CanonicalUri(absolute_path="/apiKeys/abc"),
                resource_class=ApiKey,
            )
        )
        result.data["encryptionMetadata"]
        # {"encryptionKeySalt": "...", "encryptionKeySize": 128,
        #  "encryptionKeyIterations": 1024}
        ```
    """

    def __init__(
        self,
        query_string_factory: QueryStringFactory | None = None,
        salt_generator: SaltGenerator | None = None,
        default_key_size: int = DEFAULT_ENCRYPTION_SIZE,
        default_key_iterations: int = DEFAULT_ENCRYPTION_ITERATIONS,
    ) -> None:
        """Initialize ApiKeyQueryFilter.

        Args:
            query_string_factory: Serializer for the encryption criteria.
                Defaults to QueryStringFactory.
            salt_generator: Source of per-request salts. Defaults to
                DefaultSaltGenerator.
            default_key_size: Key size (bits) requested when the filter adds
                the envelope, and assumed when a caller's envelope omits it.
            default_key_iterations: Iteration count requested when the filter
                adds the envelope, and assumed when a caller's envelope
                omits it.
        """
        if default_key_size <= 0:
            raise ValueError("default_key_size must be positive")
        if default_key_iterations <= 0:
            raise ValueError("default_key_iterations must be positive")
        self._query_string_factory = query_string_factory or QueryStringFactory()
        self._salt_generator = salt_generator or DefaultSaltGenerator()
        self._default_key_size = default_key_size
        self._default_key_iterations = default_key_iterations

    def filter_query_string(
        self,
        resource_class: type,
        query_string: QueryString | None,
    ) -> QueryString | None:
        """Condition an outgoing query without running a full request cycle.

        If ``resource_class`` is an ApiKey or ApiKeyList and the query has no
        ``encryptSecret`` parameter, a new QueryString is returned holding the
        envelope followed by every non-envelope parameter of ``query_string``.
        Otherwise ``query_string`` itself is returned.

        Args:
            resource_class: Class of the resource the query targets.
            query_string: Query to condition; may be None.

        Returns:
            The new QueryString if the envelope was added, else the argument.

        Raises:
            SaltGenerationError: If no salt can be produced.
        """
        if not ResourceKind.of(resource_class).is_api_key:
            return query_string
        if query_string is not None and ENCRYPT_SECRET in query_string:
            return query_string

        conditioned = self._create_encryption_query()
        if query_string:
            for key, value in query_string.items():
                if key not in ENVELOPE_PARAMETERS:
                    conditioned[key] = value
        return conditioned

    def filter(self, request: ResourceDataRequest, chain: FilterChain) -> ResourceDataResult:
        """Add the envelope before dispatch and echo it back after.

        DELETE requests and resources other than ApiKey/ApiKeyList pass
        through untouched.

        Raises:
            SaltGenerationError: If a salt is needed and cannot be produced.
            EncryptionParameterError: If ``encryptionKeySize`` or
                ``encryptionKeyIterations`` is present but not an integer.
        """
        if request.action is ResourceAction.Delete or not request.resource_kind.is_api_key:
            return chain.filter(request)

        is_collection = request.resource_kind is ResourceKind.ApiKeyCollection
        query = request.query

        add_encryption_criteria = query is None or query.is_empty() or ENCRYPT_SECRET not in query
        # An explicit encryptSecret=true still needs its metadata echoed back.
        add_encryption_metadata = add_encryption_criteria or _is_true(query.get(ENCRYPT_SECRET))

        if add_encryption_criteria:
            encryption_query = self._create_encryption_query()
            if query is None:
                uri = CanonicalUri(
                    absolute_path=request.uri.absolute_path,
                    query=encryption_query,
                )
                request = request.with_uri(uri)
            else:
                query.put_all(encryption_query)

        logger.debug(
            "api_key_query_filter.dispatch",
            action=request.action.value,
            path=request.uri.absolute_path,
            collection=is_collection,
            criteria_added=add_encryption_criteria,
            metadata_expected=add_encryption_metadata,
        )

        result = chain.filter(request)

        if add_encryption_metadata:
            metadata = self._build_encryption_metadata(request.query or QueryString())
            decorated = self._attach_metadata(result.data, metadata)
            logger.debug(
                "api_key_query_filter.metadata_attached",
                path=request.uri.absolute_path,
                resources=decorated,
            )

        return result

    def _create_encryption_query(self) -> QueryString:
        criteria = build_criteria(
            [
                (ENCRYPT_SECRET, True),
                (ENCRYPTION_KEY_SIZE, self._default_key_size),
                (ENCRYPTION_KEY_ITERATIONS, self._default_key_iterations),
                (ENCRYPTION_KEY_SALT, self._salt_generator.generate()),
            ]
        )
        return self._query_string_factory.create_query_string(criteria)

    def _build_encryption_metadata(self, query: QueryString) -> dict[str, Any]:
        """Effective envelope values, in wire order: salt, size, iterations."""
        return {
            ENCRYPTION_KEY_SALT: query.get(ENCRYPTION_KEY_SALT),
            ENCRYPTION_KEY_SIZE: parse_int_parameter(
                query, ENCRYPTION_KEY_SIZE, self._default_key_size
            ),
            ENCRYPTION_KEY_ITERATIONS: parse_int_parameter(
                query, ENCRYPTION_KEY_ITERATIONS, self._default_key_iterations
            ),
        }

    @staticmethod
    def _attach_metadata(data: dict[str, Any], metadata: dict[str, Any]) -> int:
        """Attach ``metadata`` to each collection item or to ``data`` itself.

        Returns:
            Number of resources decorated.
        """
        if ApiKeyList.is_collection_resource(data):
            items = data[ApiKeyList.ITEMS_PROPERTY_NAME]
            for item in items:
                item[ENCRYPTION_METADATA] = dict(metadata)
            return len(items)
        data[ENCRYPTION_METADATA] = dict(metadata)
        return 1


def _is_true(value: str | None) -> bool:
    """Boolean parse of a query value: only ``true`` (any case) is true."""
    return value is not None and value.lower() == "true"
