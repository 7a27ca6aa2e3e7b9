"""Default salt generator backed by the OS CSPRNG."""

import os
from base64 import urlsafe_b64encode

from apikeyguard.domain.interfaces.salt_generator import SaltGenerator
from apikeyguard.domain.models.system_error import SaltGenerationError

MIN_SALT_SIZE_BYTES = 16


class DefaultSaltGenerator(SaltGenerator):
    """Generates URL-safe base64 salts from ``os.urandom``.

    With the default 32 bytes every salt is 43 characters long. There is no
    shared state, so concurrent callers get independent salts.
    """

    def __init__(self, salt_size_bytes: int = 32) -> None:
        """Initialize DefaultSaltGenerator.

        Args:
            salt_size_bytes: Number of random bytes per salt (at least 16).

        Raises:
            ValueError: If salt_size_bytes is too small.
        """
        if salt_size_bytes < MIN_SALT_SIZE_BYTES:
            raise ValueError(
                f"salt_size_bytes must be at least {MIN_SALT_SIZE_BYTES}, got {salt_size_bytes}"
            )
        self._salt_size_bytes = salt_size_bytes

    @property
    def salt_size_bytes(self) -> int:
        return self._salt_size_bytes

    def generate(self) -> str:
        """Return a fresh salt.

        Raises:
            SaltGenerationError: If the OS entropy source is unavailable.
        """
        try:
            raw = os.urandom(self._salt_size_bytes)
        except (NotImplementedError, OSError) as e:
            raise SaltGenerationError(f"Entropy source unavailable: {e}") from e
        return urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
