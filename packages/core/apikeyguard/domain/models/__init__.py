"""Domain models for apikeyguard."""

from apikeyguard.domain.models.api_key import (
    ApiKey,
    ApiKeyList,
    ApiKeyStatus,
    EncryptionMetadata,
)
from apikeyguard.domain.models.api_key_parameter import (
    DEFAULT_ENCRYPTION_ITERATIONS,
    DEFAULT_ENCRYPTION_SIZE,
    ENVELOPE_PARAMETERS,
    ApiKeyParameter,
)
from apikeyguard.domain.models.canonical_uri import CanonicalUri, QueryString
from apikeyguard.domain.models.criteria import (
    ApiKeyCriteria,
    EqualsExpression,
    EqualsExpressionFactory,
    build_criteria,
)
from apikeyguard.domain.models.resource_data import (
    ResourceAction,
    ResourceDataRequest,
    ResourceDataResult,
    ResourceKind,
)
from apikeyguard.domain.models.system_error import (
    EncryptionParameterError,
    ErrorCategory,
    SaltGenerationError,
    SystemError,
    TransportError,
)

__all__ = [
    "ApiKey",
    "ApiKeyList",
    "ApiKeyStatus",
    "EncryptionMetadata",
    "ApiKeyParameter",
    "DEFAULT_ENCRYPTION_SIZE",
    "DEFAULT_ENCRYPTION_ITERATIONS",
    "ENVELOPE_PARAMETERS",
    "CanonicalUri",
    "QueryString",
    "ApiKeyCriteria",
    "EqualsExpression",
    "EqualsExpressionFactory",
    "build_criteria",
    "ResourceAction",
    "ResourceKind",
    "ResourceDataRequest",
    "ResourceDataResult",
    "SystemError",
    "ErrorCategory",
    "TransportError",
    "EncryptionParameterError",
    "SaltGenerationError",
]
