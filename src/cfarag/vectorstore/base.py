# src/cfarag/vectorstore/base.py
"""Abstract base class for chunk similarity search."""

from abc import ABC, abstractmethod

from cfarag.models import TextChunk
from cfarag.topics import TopicArea


class VectorIndex(ABC):
    """Abstract base class for an embedded chunk index."""

    @abstractmethod
    def add(self, chunks: list[TextChunk], embeddings: list[list[float]]) -> None:
        """Add (or overwrite) chunks with their embeddings."""
        ...

    @abstractmethod
    def search(
        self,
        embedding: list[float],
        k: int = 5,
        topic: TopicArea | None = None,
    ) -> list[tuple[TextChunk, float]]:
        """Search for similar chunks, optionally restricted to one topic.

        Returns (TextChunk, score) pairs ordered by relevance, highest first.
        """
        ...

    @abstractmethod
    def count(self, topic: TopicArea | None = None) -> int:
        """Count indexed chunks, optionally for one topic."""
        ...

    @abstractmethod
    def delete_source(self, topic: TopicArea, source: str) -> None:
        """Remove every chunk of one document, before it is re-indexed."""
        ...

    def close(self) -> None:
        """Release resources held by the index."""
