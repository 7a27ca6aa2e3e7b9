"""Request and result envelopes passed through the resource filter chain."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from apikeyguard.domain.models.api_key import ApiKey, ApiKeyList
from apikeyguard.domain.models.canonical_uri import CanonicalUri, QueryString


class ResourceAction(str, Enum):
    """Action requested against a resource."""

    Create = "CREATE"
    Read = "READ"
    Update = "UPDATE"
    Delete = "DELETE"


class ResourceKind(str, Enum):
    """Closed set of resource kinds the filters distinguish."""

    SingleApiKey = "single_api_key"
    """One ApiKey resource."""

    ApiKeyCollection = "api_key_collection"
    """An ApiKeyList collection."""

    Other = "other"
    """Any other resource; ApiKey filters ignore it."""

    @classmethod
    def of(cls, resource_class: type | None) -> ResourceKind:
        """Resolve the kind of a resource class.

        Collections are checked first so that a class deriving from both is
        treated as a collection.
        """
        if not isinstance(resource_class, type):
            return cls.Other
        if issubclass(resource_class, ApiKeyList):
            return cls.ApiKeyCollection
        if issubclass(resource_class, ApiKey):
            return cls.SingleApiKey
        return cls.Other

    @property
    def is_api_key(self) -> bool:
        """True for both single ApiKeys and ApiKey collections."""
        return self is not ResourceKind.Other


class ResourceDataRequest(BaseModel):
    """An outgoing resource call.

    Requests are immutable. A filter that needs a different URI builds a new
    request with :meth:`with_uri`; the query held by the URI may still be
    updated in place.

    Example:
        ```python
        request = ResourceDataRequest(
            action=ResourceAction.Read,
            uri=CanonicalUri(absolute_path="/apiKeys/abc"),
            resource_class=ApiKey,
        )
        request.resource_kind  # ResourceKind.SingleApiKey
        ```
    """

    action: ResourceAction = Field(..., description="Requested action")
    uri: CanonicalUri = Field(..., description="Target path and query")
    resource_class: type = Field(..., description="Class of the target resource")
    resource_kind: ResourceKind = Field(
        default=ResourceKind.Other,
        description="Kind derived from resource_class at construction time",
    )
    data: dict[str, Any] | None = Field(
        default=None,
        description="Payload for CREATE/UPDATE",
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def resolve_resource_kind(cls, values: Any) -> Any:
        """Derive resource_kind from resource_class.

        An explicit resource_kind is only accepted when it matches the class.

        Raises:
            ValueError: If the given resource_kind contradicts resource_class.
        """
        if not isinstance(values, dict):
            return values
        derived = ResourceKind.of(values.get("resource_class"))
        given = values.get("resource_kind")
        if given is not None and ResourceKind(given) is not derived:
            raise ValueError(
                f"resource_kind {ResourceKind(given).value!r} does not match "
                f"resource_class (resolved as {derived.value!r})"
            )
        return {**values, "resource_kind": derived}

    @property
    def query(self) -> QueryString | None:
        """Query of the request URI, if any."""
        return self.uri.query

    def with_uri(self, uri: CanonicalUri) -> ResourceDataRequest:
        """Return a copy of this request targeting ``uri``."""
        return ResourceDataRequest(
            action=self.action,
            uri=uri,
            resource_class=self.resource_class,
            data=self.data,
        )


class ResourceDataResult(BaseModel):
    """Decoded response of a resource call.

    ``data`` is the JSON-like payload; filters may decorate it in place on the
    way back up the chain.
    """

    action: ResourceAction = Field(..., description="Action that produced this result")
    uri: CanonicalUri = Field(..., description="URI the request was sent to")
    resource_class: type = Field(..., description="Class of the returned resource")
    data: dict[str, Any] = Field(default_factory=dict, description="Decoded payload")

    model_config = ConfigDict(arbitrary_types_allowed=True)
