"""Abstract contract for the remote deck conversion service."""

from abc import ABC, abstractmethod

from core.models.deck import BuildRequest, ConversionResult


class DeckConversionRepository(ABC):
    """Contract for turning prepared images into a deck or an archive of decks.

    Implementations could be an HTTP service, an in-process renderer, etc.
    The build orchestrator depends on this interface, not the implementation.
    """

    @abstractmethod
    def convert(self, request: BuildRequest) -> ConversionResult:
        """Send ``request`` and return the produced artifact.

        Args:
            request: Ordered transformed images plus presentation options

        Returns:
            Artifact bytes and the declared content type

        Raises:
            ConversionServiceError: If the service rejects the request or
                cannot be reached
        """

    def close(self) -> None:
        """Release any connection held by the implementation."""
