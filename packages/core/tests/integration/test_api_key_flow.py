"""End-to-end flow: filter chain, HTTP transport and client-side decryption.

A fake service answers over ``httpx.MockTransport`` and encrypts secrets
with whatever envelope the request carried, as the real service does.
"""

from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from apikeyguard.data_store import ResourceDataStore
from apikeyguard.domain.models.api_key import ApiKey, ApiKeyList
from apikeyguard.domain.models.api_key_parameter import ApiKeyParameter
from apikeyguard.infrastructure.adapters.http_transport import HttpResourceTransport
from apikeyguard.infrastructure.utils.encryption import ApiKeySecretEncryptionService

CLIENT_SECRET = "client-api-key-secret"
SECRETS = {"k1": "first-clear-secret", "k2": "second-clear-secret"}


class FakeApiKeyService:
    """Minimal ApiKey endpoint honoring the encryption envelope."""

    def __init__(self) -> None:
        self.encryption = ApiKeySecretEncryptionService(password=CLIENT_SECRET)
        self.requests: list[httpx.Request] = []

    def _render(self, key_id: str, params: httpx.QueryParams) -> dict[str, Any]:
        secret = SECRETS[key_id]
        if params.get(ApiKeyParameter.ENCRYPT_SECRET.value) == "true":
            secret = self.encryption.encrypt(
                secret,
                {
                    "encryptionKeySalt": params[ApiKeyParameter.ENCRYPTION_KEY_SALT.value],
                    "encryptionKeySize": int(params[ApiKeyParameter.ENCRYPTION_KEY_SIZE.value]),
                    "encryptionKeyIterations": int(
                        params[ApiKeyParameter.ENCRYPTION_KEY_ITERATIONS.value]
                    ),
                },
            )
        return {"href": f"/apiKeys/{key_id}", "id": key_id, "secret": secret, "status": "ENABLED"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        if request.method == "DELETE":
            return httpx.Response(204)
        if path == "/apiKeys":
            items = [self._render(key_id, request.url.params) for key_id in SECRETS]
            return httpx.Response(
                200, json={"href": "/apiKeys", "size": len(items), "items": items}
            )
        key_id = path.rsplit("/", 1)[-1]
        if key_id not in SECRETS:
            return httpx.Response(404, json={"message": "not found"})
        return httpx.Response(200, json=self._render(key_id, request.url.params))


@pytest.fixture
def service() -> FakeApiKeyService:
    return FakeApiKeyService()


@pytest.fixture
def store(service) -> Iterator[ResourceDataStore]:
    client = httpx.Client(transport=httpx.MockTransport(service))
    transport = HttpResourceTransport(base_url="https://api.example.com/v1", client=client)
    yield ResourceDataStore(
        transport=transport,
        config={"filters": ["logging", "api_key_query"], "encryption_key_iterations": 64},
    )
    client.close()


class TestApiKeyFlow:
    """End-to-end ApiKey reads."""

    def test_single_key_secret_decrypts(self, store, service) -> None:
        """Test reading one key: envelope sent, secret encrypted, decrypted locally."""
        result = store.read("/apiKeys/k1", ApiKey)

        sent = service.requests[-1].url.params
        assert sent["encryptSecret"] == "true"
        assert sent["encryptionKeyIterations"] == "64"

        api_key = ApiKey.from_resource_data(result.data)
        assert api_key.secret != SECRETS["k1"]
        assert api_key.encryption_metadata.encryption_key_salt == sent["encryptionKeySalt"]
        decrypted = api_key.decrypt_secret(ApiKeySecretEncryptionService(password=CLIENT_SECRET))
        assert decrypted == SECRETS["k1"]

    def test_collection_secrets_decrypt(self, store) -> None:
        """Test that every collection item can be decrypted."""
        result = store.read("/apiKeys", ApiKeyList, query={"limit": 10})

        keys = ApiKeyList.from_resource_data(result.data)
        encryption = ApiKeySecretEncryptionService(password=CLIENT_SECRET)
        assert {k.id: k.decrypt_secret(encryption) for k in keys.items} == SECRETS

    def test_encryption_disabled(self, store, service) -> None:
        """Test that encryptSecret=false returns clear secrets without metadata."""
        result = store.read("/apiKeys/k2", ApiKey, query={"encryptSecret": False})

        assert dict(service.requests[-1].url.params) == {"encryptSecret": "false"}
        api_key = ApiKey.from_resource_data(result.data)
        assert not api_key.is_secret_encrypted()
        assert api_key.secret == SECRETS["k2"]

    def test_delete_sends_no_envelope(self, store, service) -> None:
        """Test that DELETE is not filtered."""
        result = store.delete("/apiKeys/k1", ApiKey)

        assert result.data == {}
        assert not service.requests[-1].url.params
