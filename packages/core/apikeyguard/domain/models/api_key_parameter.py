"""Wire names and defaults of the ApiKey encryption envelope."""

from enum import Enum


class ApiKeyParameter(str, Enum):
    """Query-string and payload names understood by the remote ApiKey resource.

    The values are part of the wire contract and must match the remote service
    exactly (case-sensitive).
    """

    ENCRYPT_SECRET = "encryptSecret"
    """Asks the service to return the secret encrypted (``true``/``false``)."""

    ENCRYPTION_KEY_SALT = "encryptionKeySalt"
    """Base64 salt used to derive the encryption key."""

    ENCRYPTION_KEY_SIZE = "encryptionKeySize"
    """Derived key size in bits."""

    ENCRYPTION_KEY_ITERATIONS = "encryptionKeyIterations"
    """PBKDF2 iteration count."""

    ENCRYPTION_METADATA = "encryptionMetadata"
    """Response property holding the effective envelope values."""


DEFAULT_ENCRYPTION_SIZE = 128
DEFAULT_ENCRYPTION_ITERATIONS = 1024

# The four query parameters that make up the envelope.
ENVELOPE_PARAMETERS: frozenset[str] = frozenset(
    {
        ApiKeyParameter.ENCRYPT_SECRET.value,
        ApiKeyParameter.ENCRYPTION_KEY_SALT.value,
        ApiKeyParameter.ENCRYPTION_KEY_SIZE.value,
        ApiKeyParameter.ENCRYPTION_KEY_ITERATIONS.value,
    }
)
