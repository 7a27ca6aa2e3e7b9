"""ApiKey resource models as returned by the remote service."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apikeyguard.domain.models.api_key_parameter import (
    DEFAULT_ENCRYPTION_ITERATIONS,
    DEFAULT_ENCRYPTION_SIZE,
)

if TYPE_CHECKING:
    from apikeyguard.infrastructure.utils.encryption import ApiKeySecretEncryptionService


class ApiKeyStatus(str, Enum):
    """Status of an ApiKey on the remote service."""

    Enabled = "ENABLED"
    """Key may be used to authenticate."""

    Disabled = "DISABLED"
    """Key has been disabled and cannot authenticate."""


class EncryptionMetadata(BaseModel):
    """Effective envelope values echoed back with a returned ApiKey.

    The metadata is what a client needs to decrypt the ``secret`` property:
    the salt plus the key-derivation parameters that were in effect for the
    request.
    """

    encryption_key_salt: str | None = Field(
        default=None,
        alias="encryptionKeySalt",
        description="Base64 salt used for key derivation",
    )
    encryption_key_size: int = Field(
        default=DEFAULT_ENCRYPTION_SIZE,
        alias="encryptionKeySize",
        description="Derived key size in bits",
        gt=0,
    )
    encryption_key_iterations: int = Field(
        default=DEFAULT_ENCRYPTION_ITERATIONS,
        alias="encryptionKeyIterations",
        description="PBKDF2 iteration count",
        gt=0,
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("encryption_key_size")
    @classmethod
    def validate_key_size(cls, v: int) -> int:
        """AES only accepts 128, 192 or 256 bit keys."""
        if v not in (128, 192, 256):
            raise ValueError(f"Encryption key size must be 128, 192 or 256 bits, got {v}")
        return v


class ApiKey(BaseModel):
    """A single ApiKey resource.

    ``secret`` holds whatever the service returned: the encrypted secret when
    the request carried an envelope, the clear value otherwise. It is never
    included in ``repr``.
    """

    href: str | None = Field(default=None, description="Resource href")
    id: str = Field(..., description="Public key identifier", min_length=1)
    secret: str | None = Field(
        default=None,
        description="Secret as returned by the service (normally encrypted)",
        repr=False,
    )
    status: ApiKeyStatus = Field(default=ApiKeyStatus.Enabled, description="Key status")
    name: str | None = Field(default=None, description="Optional display name")
    description: str | None = Field(default=None, description="Optional description")
    encryption_metadata: EncryptionMetadata | None = Field(
        default=None,
        alias="encryptionMetadata",
        description="Envelope values the secret was encrypted with",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    @classmethod
    def from_resource_data(cls, data: dict[str, Any]) -> ApiKey:
        """Build an ApiKey from a decoded resource payload."""
        return cls.model_validate(data)

    def is_secret_encrypted(self) -> bool:
        """Return True when the service echoed back encryption metadata."""
        return self.encryption_metadata is not None

    def decrypt_secret(self, encryption_service: ApiKeySecretEncryptionService) -> str | None:
        """Return the clear secret.

        Args:
            encryption_service: Service holding the password the secret was
                encrypted for.

        Returns:
            The decrypted secret, the raw secret when no envelope is attached,
            or None when the payload carried no secret.
        """
        if self.secret is None:
            return None
        if self.encryption_metadata is None:
            return self.secret
        return encryption_service.decrypt(self.secret, self.encryption_metadata)


class ApiKeyList(BaseModel):
    """A paginated collection of ApiKey resources."""

    ITEMS_PROPERTY_NAME: ClassVar[str] = "items"

    href: str | None = Field(default=None, description="Collection href")
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=25, ge=1)
    size: int = Field(default=0, ge=0, description="Total number of items on the service")
    items: list[ApiKey] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def is_collection_resource(cls, data: Any) -> bool:
        """Return True when a decoded payload has the shape of a collection."""
        return isinstance(data, dict) and isinstance(data.get(cls.ITEMS_PROPERTY_NAME), list)

    @classmethod
    def from_resource_data(cls, data: dict[str, Any]) -> ApiKeyList:
        """Build an ApiKeyList from a decoded collection payload."""
        return cls.model_validate(data)
