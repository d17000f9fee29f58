"""Abstract interface for search indexing."""

from abc import ABC, abstractmethod


class IndexingService(ABC):
    """Abstract base class for transcript search indexing backends."""

    @abstractmethod
    def index(self, transcript_id: str, content: str) -> None:
        """
        Indexes a transcript for search.

        Args:
            transcript_id: The persisted transcript identifier.
            content: The transcript text to index.

        Raises:
            SideEffectError: If indexing fails.
        """
