"""SaltGenerator interface."""

from abc import ABC, abstractmethod


class SaltGenerator(ABC):
    """Produces a fresh random salt token per call.

    Implementations must be safe to call concurrently and must never return a
    cached value. When no entropy is available they raise
    ``SaltGenerationError`` instead of degrading to a weaker source.
    """

    @abstractmethod
    def generate(self) -> str:
        """Return a new salt token.

        Raises:
            SaltGenerationError: If the entropy source is unavailable.
        """
        ...
