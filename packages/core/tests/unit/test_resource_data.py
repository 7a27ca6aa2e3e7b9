"""Tests for ResourceDataRequest, ResourceDataResult and ResourceKind."""

import pytest
from pydantic import ValidationError

from apikeyguard.domain.models.api_key import ApiKey, ApiKeyList
from apikeyguard.domain.models.canonical_uri import CanonicalUri, QueryString
from apikeyguard.domain.models.resource_data import (
    ResourceAction,
    ResourceDataRequest,
    ResourceDataResult,
    ResourceKind,
)


class Account:
    """Plain resource class."""


class CustomApiKeyList(ApiKeyList):
    """Collection subclass."""


class TestResourceKind:
    """Tests for ResourceKind resolution."""

    @pytest.mark.parametrize(
        "resource_class, expected",
        [
            (ApiKey, ResourceKind.SingleApiKey),
            (ApiKeyList, ResourceKind.ApiKeyCollection),
            (CustomApiKeyList, ResourceKind.ApiKeyCollection),
            (Account, ResourceKind.Other),
            (dict, ResourceKind.Other),
        ],
    )
    def test_of(self, resource_class, expected) -> None:
        """Test kind resolution by class hierarchy."""
        assert ResourceKind.of(resource_class) is expected

    def test_non_class_is_other(self) -> None:
        """Test that non-types resolve to Other."""
        assert ResourceKind.of(None) is ResourceKind.Other

    def test_is_api_key(self) -> None:
        """Test the ApiKey family predicate."""
        assert ResourceKind.SingleApiKey.is_api_key
        assert ResourceKind.ApiKeyCollection.is_api_key
        assert not ResourceKind.Other.is_api_key


class TestResourceDataRequest:
    """Tests for ResourceDataRequest."""

    def test_kind_resolved_at_construction(self) -> None:
        """Test that resource_kind is derived from resource_class."""
        request = ResourceDataRequest(
            action=ResourceAction.Read,
            uri=CanonicalUri(absolute_path="/apiKeys"),
            resource_class=ApiKeyList,
        )

        assert request.resource_kind is ResourceKind.ApiKeyCollection
        assert request.query is None

    def test_with_uri_returns_new_request(self) -> None:
        """Test that with_uri keeps everything but the URI."""
        request = ResourceDataRequest(
            action=ResourceAction.Update,
            uri=CanonicalUri(absolute_path="/apiKeys/k1"),
            resource_class=ApiKey,
            data={"status": "DISABLED"},
        )
        query = QueryString({"encryptSecret": "true"})

        replaced = request.with_uri(CanonicalUri(absolute_path="/apiKeys/k1", query=query))

        assert replaced is not request
        assert replaced.query is query
        assert replaced.action is ResourceAction.Update
        assert replaced.resource_class is ApiKey
        assert replaced.resource_kind is ResourceKind.SingleApiKey
        assert replaced.data == {"status": "DISABLED"}
        assert request.query is None

    @pytest.mark.parametrize(
        "resource_class, kind",
        [
            (ApiKey, ResourceKind.Other),
            (ApiKey, ResourceKind.ApiKeyCollection),
            (ApiKeyList, ResourceKind.SingleApiKey),
            (Account, ResourceKind.SingleApiKey),
        ],
    )
    def test_contradicting_kind_rejected(self, resource_class, kind) -> None:
        """Test that an explicit kind must agree with resource_class."""
        with pytest.raises(ValidationError, match="does not match"):
            ResourceDataRequest(
                action=ResourceAction.Read,
                uri=CanonicalUri(absolute_path="/apiKeys/k1"),
                resource_class=resource_class,
                resource_kind=kind,
            )

    def test_matching_kind_accepted(self) -> None:
        """Test that an explicit kind equal to the derived one is accepted."""
        request = ResourceDataRequest(
            action=ResourceAction.Read,
            uri=CanonicalUri(absolute_path="/apiKeys/k1"),
            resource_class=ApiKey,
            resource_kind="single_api_key",
        )

        assert request.resource_kind is ResourceKind.SingleApiKey

    def test_request_is_frozen(self) -> None:
        """Test that requests cannot be mutated."""
        request = ResourceDataRequest(
            action=ResourceAction.Read,
            uri=CanonicalUri(absolute_path="/apiKeys"),
            resource_class=ApiKey,
        )

        with pytest.raises(ValidationError):
            request.action = ResourceAction.Delete

    def test_query_may_be_mutated_in_place(self) -> None:
        """Test that the held query stays mutable."""
        query = QueryString()
        request = ResourceDataRequest(
            action=ResourceAction.Read,
            uri=CanonicalUri(absolute_path="/apiKeys", query=query),
            resource_class=ApiKey,
        )

        request.query["limit"] = "5"

        assert dict(query) == {"limit": "5"}


class TestResourceDataResult:
    """Tests for ResourceDataResult."""

    def test_data_defaults_to_empty(self) -> None:
        """Test default payload."""
        result = ResourceDataResult(
            action=ResourceAction.Delete,
            uri=CanonicalUri(absolute_path="/apiKeys/k1"),
            resource_class=ApiKey,
        )

        assert result.data == {}
