"""Tests for ApiKeySecretEncryptionService."""

import pytest

from apikeyguard.domain.models.api_key import EncryptionMetadata
from apikeyguard.infrastructure.utils.encryption import (
    ApiKeySecretEncryptionService,
    SecretEncryptionError,
)
from apikeyguard.infrastructure.utils.salt import DefaultSaltGenerator


@pytest.fixture
def metadata() -> EncryptionMetadata:
    return EncryptionMetadata(encryption_key_salt=DefaultSaltGenerator().generate())


class TestApiKeySecretEncryptionService:
    """Tests for ApiKeySecretEncryptionService."""

    def test_round_trip(self, metadata) -> None:
        """Test that a secret decrypts back to its clear value."""
        service = ApiKeySecretEncryptionService(password="client-secret")

        encrypted = service.encrypt("s3cr3t-value", metadata)

        assert encrypted != "s3cr3t-value"
        assert service.decrypt(encrypted, metadata) == "s3cr3t-value"

    @pytest.mark.parametrize("key_size", [192, 256])
    def test_larger_keys(self, key_size) -> None:
        """Test the other AES key sizes."""
        metadata = EncryptionMetadata(
            encryption_key_salt=DefaultSaltGenerator().generate(),
            encryption_key_size=key_size,
            encryption_key_iterations=16,
        )
        service = ApiKeySecretEncryptionService(password="client-secret")

        assert service.decrypt(service.encrypt("value", metadata), metadata) == "value"

    def test_accepts_wire_mapping(self, metadata) -> None:
        """Test that an encryptionMetadata mapping is accepted."""
        service = ApiKeySecretEncryptionService(password="client-secret")
        wire = metadata.model_dump(by_alias=True)

        assert service.decrypt(service.encrypt("value", wire), wire) == "value"

    def test_wrong_password_fails(self, metadata) -> None:
        """Test that another password cannot decrypt."""
        encrypted = ApiKeySecretEncryptionService(password="right").encrypt("value", metadata)

        with pytest.raises(SecretEncryptionError):
            ApiKeySecretEncryptionService(password="wrong").decrypt(encrypted, metadata)

    def test_missing_salt_fails(self) -> None:
        """Test that metadata without salt cannot derive a key."""
        service = ApiKeySecretEncryptionService(password="client-secret")

        with pytest.raises(SecretEncryptionError, match="salt"):
            service.encrypt("value", EncryptionMetadata())

    def test_corrupted_ciphertext_fails(self, metadata) -> None:
        """Test that truncated input is reported."""
        service = ApiKeySecretEncryptionService(password="client-secret")

        with pytest.raises(SecretEncryptionError):
            service.decrypt("AAAA", metadata)

    def test_invalid_metadata_mapping(self) -> None:
        """Test that an invalid envelope mapping is reported."""
        service = ApiKeySecretEncryptionService(password="client-secret")

        with pytest.raises(SecretEncryptionError, match="metadata"):
            service.encrypt("value", {"encryptionKeySalt": "abc", "encryptionKeySize": 100})

    def test_password_from_environment(self, monkeypatch, metadata) -> None:
        """Test loading the password from APIKEYGUARD_CLIENT_SECRET."""
        monkeypatch.setenv("APIKEYGUARD_CLIENT_SECRET", "from-env")
        encrypted = ApiKeySecretEncryptionService().encrypt("value", metadata)

        service = ApiKeySecretEncryptionService(password="from-env")
        assert service.decrypt(encrypted, metadata) == "value"

    def test_missing_password(self, monkeypatch) -> None:
        """Test that a password is required."""
        monkeypatch.delenv("APIKEYGUARD_CLIENT_SECRET", raising=False)

        with pytest.raises(SecretEncryptionError, match="password"):
            ApiKeySecretEncryptionService()
