# tests/test_embedder.py
"""Tests for ClientEmbedder."""

import pytest

from cfarag.embedder import ClientEmbedder, Embedder
from cfarag.models import TextChunk
from cfarag.providers import EmbeddingClient
from cfarag.topics import TopicArea


class CountingClient(EmbeddingClient):
    def __init__(self) -> None:
        self.batches: list[list[str]] = []

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.batches.append(texts)
        return [[float(len(t))] for t in texts]


class TestClientEmbedder:
    def test_is_embedder(self):
        assert isinstance(ClientEmbedder(CountingClient()), Embedder)

    def test_embed_text(self):
        assert ClientEmbedder(CountingClient()).embed_text("abc") == [3.0]

    def test_embed_texts_batches(self):
        client = CountingClient()
        assert ClientEmbedder(client).embed_texts(["a", "bb"]) == [[1.0], [2.0]]
        assert client.batches == [["a", "bb"]]

    def test_embed_texts_empty(self):
        client = CountingClient()
        assert ClientEmbedder(client).embed_texts([]) == []
        assert client.batches == []

    def test_embed_chunks(self):
        chunks = [
            TextChunk(content="xy", source="a.pdf", topic=TopicArea.ECONOMICS, ordinal=0),
            TextChunk(content="xyz", source="a.pdf", topic=TopicArea.ECONOMICS, ordinal=1),
        ]
        assert ClientEmbedder(CountingClient()).embed_chunks(chunks) == [[2.0], [3.0]]

    def test_embed_chunks_length_mismatch(self):
        class ShortClient(EmbeddingClient):
            def embed(self, texts):
                return [[0.0]]

        chunk = TextChunk(content="x", source="a.pdf", topic=TopicArea.ECONOMICS, ordinal=0)
        with pytest.raises(ValueError, match="returned 1 vectors for 2 chunks"):
            ClientEmbedder(ShortClient()).embed_chunks([chunk, chunk])
