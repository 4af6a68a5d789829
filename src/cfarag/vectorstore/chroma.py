# src/cfarag/vectorstore/chroma.py
"""ChromaDB chunk index implementation."""

from pathlib import Path
from typing import cast

import chromadb

from cfarag.models import TextChunk
from cfarag.topics import TopicArea
from cfarag.vectorstore.base import VectorIndex


class ChromaChunkIndex(VectorIndex):
    """ChromaDB-based chunk index using cosine distance."""

    def __init__(self, persist_dir: str, collection_name: str = "cfa_materials") -> None:
        """Initialize the ChromaDB index."""
        Path(persist_dir).mkdir(parents=True, exist_ok=True)
        self._client = chromadb.PersistentClient(path=persist_dir)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    def close(self) -> None:
        """Close the index and release resources.

        ChromaDB doesn't have an official close method, so the internal
        _system.stop() is called to release file handles.

        See: https://github.com/chroma-core/chroma/issues/5868
        """
        self._collection = None  # type: ignore[assignment]
        if self._client is not None and hasattr(self._client, "_system"):
            self._client._system.stop()
        self._client = None  # type: ignore[assignment]

    def add(self, chunks: list[TextChunk], embeddings: list[list[float]]) -> None:
        """Upsert chunks with embeddings; chunk IDs are stable per document."""
        if not chunks:
            return

        self._collection.upsert(
            ids=[chunk.id for chunk in chunks],
            embeddings=embeddings,  # type: ignore[arg-type]
            documents=[chunk.content for chunk in chunks],
            metadatas=[
                {
                    "source": chunk.source,
                    "topic": chunk.topic.value,
                    "ordinal": chunk.ordinal,
                    "start": chunk.start,
                    "end": chunk.end,
                }
                for chunk in chunks
            ],
        )

    def search(
        self,
        embedding: list[float],
        k: int = 5,
        topic: TopicArea | None = None,
    ) -> list[tuple[TextChunk, float]]:
        """Search for similar chunks."""
        available = self.count(topic)
        if available == 0:
            return []

        results = self._collection.query(
            query_embeddings=[embedding],  # type: ignore[arg-type]
            n_results=min(k, available),
            where=self._where(topic),  # type: ignore[arg-type]
            include=["documents", "metadatas", "distances"],
        )

        documents = results["documents"][0]  # type: ignore[index]
        metadatas = results["metadatas"][0]  # type: ignore[index]
        distances = results["distances"][0]  # type: ignore[index]

        hits = []
        for content, meta, dist in zip(documents, metadatas, distances, strict=True):
            chunk = TextChunk(
                content=content,
                source=cast(str, meta["source"]),
                topic=TopicArea(meta["topic"]),
                ordinal=cast(int, meta["ordinal"]),
                start=cast(int, meta.get("start", 0)),
                end=cast(int, meta.get("end", 0)),
            )
            # For cosine distance: similarity = 1 - distance
            hits.append((chunk, 1.0 - dist))

        return hits

    def count(self, topic: TopicArea | None = None) -> int:
        """Count indexed chunks, optionally for one topic."""
        if topic is None:
            return self._collection.count()
        results = self._collection.get(
            where=self._where(topic),  # type: ignore[arg-type]
            include=[],  # Only need count, no data
        )
        return len(results["ids"])

    def delete_source(self, topic: TopicArea, source: str) -> None:
        """Delete every chunk of one document, before re-indexing it."""
        self._collection.delete(
            where={"$and": [{"topic": topic.value}, {"source": source}]}  # type: ignore[dict-item]
        )

    @staticmethod
    def _where(topic: TopicArea | None) -> dict | None:
        return {"topic": topic.value} if topic is not None else None
