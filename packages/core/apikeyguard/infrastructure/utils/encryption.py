"""Client-side encryption of ApiKey secrets using the echoed envelope."""

import os
from base64 import b64encode, urlsafe_b64decode
from collections.abc import Mapping
from typing import Any

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from apikeyguard.domain.models.api_key import EncryptionMetadata

IV_SIZE_BYTES = 16


class SecretEncryptionError(Exception):
    """Raised when encryption/decryption of a secret fails."""

    pass


class ApiKeySecretEncryptionService:
    """Encrypts and decrypts ApiKey secrets the way the remote service does.

    The key is derived with PBKDF2-HMAC-SHA1 from the client's password (its
    own API key secret), the envelope salt and iteration count, producing an
    ``encryptionKeySize``-bit AES key. Secrets are AES-CBC encrypted with
    PKCS7 padding and transported as base64 of ``IV || ciphertext``.
    """

    def __init__(self, password: str | None = None) -> None:
        """Initialize ApiKeySecretEncryptionService.

        Args:
            password: Password the service encrypted secrets for. If None,
                loads it from the APIKEYGUARD_CLIENT_SECRET environment variable.

        Raises:
            SecretEncryptionError: If no password is provided or configured.
        """
        if password is None:
            password = os.getenv("APIKEYGUARD_CLIENT_SECRET")
        if not password:
            raise SecretEncryptionError(
                "A password is required; pass one explicitly or set APIKEYGUARD_CLIENT_SECRET"
            )
        self._password = password.encode("utf-8")

    def _derive_key(self, metadata: EncryptionMetadata) -> bytes:
        """Derive the AES key for ``metadata``.

        Raises:
            SecretEncryptionError: If the metadata carries no usable salt.
        """
        if not metadata.encryption_key_salt:
            raise SecretEncryptionError("Encryption metadata has no salt")
        try:
            salt = _b64decode(metadata.encryption_key_salt)
        except ValueError as e:
            raise SecretEncryptionError(f"Invalid encryption salt: {e}") from e
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA1(),
            length=metadata.encryption_key_size // 8,
            salt=salt,
            iterations=metadata.encryption_key_iterations,
        )
        return kdf.derive(self._password)

    def encrypt(self, secret: str, metadata: EncryptionMetadata | Mapping[str, Any]) -> str:
        """Encrypt ``secret`` under the given envelope.

        Args:
            secret: Clear secret.
            metadata: Envelope values (model or ``encryptionMetadata`` mapping).

        Returns:
            Base64 of IV followed by ciphertext.

        Raises:
            SecretEncryptionError: If encryption fails.
        """
        key = self._derive_key(_as_metadata(metadata))
        try:
            iv = os.urandom(IV_SIZE_BYTES)
            padder = padding.PKCS7(algorithms.AES.block_size).padder()
            padded = padder.update(secret.encode("utf-8")) + padder.finalize()
            encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
            ciphertext = encryptor.update(padded) + encryptor.finalize()
        except Exception as e:
            raise SecretEncryptionError(f"Failed to encrypt secret: {e}") from e
        return b64encode(iv + ciphertext).decode("ascii")

    def decrypt(
        self, encrypted_secret: str, metadata: EncryptionMetadata | Mapping[str, Any]
    ) -> str:
        """Decrypt a secret returned by the service.

        Args:
            encrypted_secret: Base64 of IV followed by ciphertext.
            metadata: Envelope values the secret was encrypted with.

        Returns:
            The clear secret.

        Raises:
            SecretEncryptionError: If decryption fails (wrong password,
                mismatched envelope or corrupted data).
        """
        key = self._derive_key(_as_metadata(metadata))
        try:
            raw = _b64decode(encrypted_secret)
            if len(raw) <= IV_SIZE_BYTES:
                raise ValueError("ciphertext too short")
            iv, ciphertext = raw[:IV_SIZE_BYTES], raw[IV_SIZE_BYTES:]
            decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            plain = unpadder.update(padded) + unpadder.finalize()
            return plain.decode("utf-8")
        except Exception as e:
            raise SecretEncryptionError(f"Failed to decrypt secret: {e}") from e


def _as_metadata(metadata: EncryptionMetadata | Mapping[str, Any]) -> EncryptionMetadata:
    if isinstance(metadata, EncryptionMetadata):
        return metadata
    try:
        return EncryptionMetadata.model_validate(dict(metadata))
    except ValueError as e:
        raise SecretEncryptionError(f"Invalid encryption metadata: {e}") from e


def _b64decode(value: str) -> bytes:
    """Decode standard or URL-safe base64, with or without padding."""
    return urlsafe_b64decode(value + "=" * (-len(value) % 4))
