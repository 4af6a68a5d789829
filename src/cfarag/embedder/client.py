# src/cfarag/embedder/client.py
"""Embedder backed by an EmbeddingClient."""

from cfarag.embedder.base import Embedder
from cfarag.providers.base import EmbeddingClient


class ClientEmbedder(Embedder):
    """Adapts any EmbeddingClient to the Embedder interface.

    Example:
        from cfarag.embedder import ClientEmbedder
        from cfarag.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient

        embedder = ClientEmbedder(LiteLLMEmbeddingClient(EmbeddingModels.TEXT_3_SMALL))
        vector = embedder.embed_text("CFA Level 1 Fixed Income duration")
    """

    def __init__(self, embedding_client: EmbeddingClient) -> None:
        self._client = embedding_client

    def embed_text(self, text: str) -> list[float]:
        (vector,) = self._client.embed([text])
        return vector

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        return self._client.embed(texts)
