# src/cfarag/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod

from cfarag.models import TextChunk


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_text and embed_texts.
    """

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        ...

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        ...

    def embed_chunks(self, chunks: list[TextChunk]) -> list[list[float]]:
        """Embed chunk contents, preserving order."""
        if not chunks:
            return []
        embeddings = self.embed_texts([chunk.content for chunk in chunks])
        if len(embeddings) != len(chunks):
            raise ValueError(
                f"Embedder returned {len(embeddings)} vectors for {len(chunks)} chunks"
            )
        return embeddings
