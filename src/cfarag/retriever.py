# src/cfarag/retriever.py
"""Source material retrieval for question generation."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass

import structlog

from cfarag.chunker import ParagraphChunker
from cfarag.embedder import Embedder
from cfarag.exceptions import NoSourceMaterial
from cfarag.ingestor import DocumentIngestor
from cfarag.models import RetrievalQuery, RetrievedContext, TextChunk
from cfarag.topics import TopicArea
from cfarag.vectorstore import VectorIndex

logger = structlog.get_logger(__name__)

DEFAULT_TOP_K = 5
DEFAULT_MAX_CONTEXT_CHARS = 6000


@dataclass(frozen=True)
class VectorSearch:
    """Similarity search over the vector index, restricted to the topic."""

    top_k: int = DEFAULT_TOP_K

    def __post_init__(self) -> None:
        if self.top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {self.top_k}")


@dataclass(frozen=True)
class LocalSample:
    """Pick one chunk at random from the topic's documents."""

    seed: int | None = None


RetrievalStrategy = VectorSearch | LocalSample

# Chunked documents keyed by (topic, subtopic), shared across one batch
ChunkCache = dict[tuple[TopicArea, str | None], list[TextChunk]]


class Retriever:
    """Selects source chunks for a RetrievalQuery.

    ``VectorSearch`` falls back to ``LocalSample`` when the index is not
    configured, fails, or returns nothing. ``NoSourceMaterial`` is raised only
    when local sampling comes up empty too.
    """

    def __init__(
        self,
        ingestor: DocumentIngestor,
        chunker: ParagraphChunker | None = None,
        strategy: RetrievalStrategy | None = None,
        vector_index: VectorIndex | None = None,
        embedder: Embedder | None = None,
        rng: random.Random | None = None,
        max_context_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
    ) -> None:
        """Initialize the retriever.

        Args:
            ingestor: Document ingestor for the material tree
            chunker: Chunker applied to loaded documents (default sizes if None)
            strategy: VectorSearch or LocalSample (default: LocalSample())
            vector_index: Index searched by VectorSearch
            embedder: Embedder for the query text
            rng: Random source for LocalSample. Defaults to one seeded from
                the strategy's seed.
            max_context_chars: Upper bound on total context characters
        """
        if max_context_chars < 1:
            raise ValueError("max_context_chars must be positive")

        self.ingestor = ingestor
        self.chunker = chunker or ParagraphChunker()
        self.strategy = strategy or LocalSample()
        self.vector_index = vector_index
        self.embedder = embedder
        self.max_context_chars = max_context_chars

        if rng is None:
            seed = self.strategy.seed if isinstance(self.strategy, LocalSample) else None
            rng = random.Random(seed)
        self._rng = rng

    async def retrieve(
        self, query: RetrievalQuery, chunk_cache: ChunkCache | None = None
    ) -> RetrievedContext:
        """Retrieve context for a query.

        Args:
            query: What to retrieve material for
            chunk_cache: Reused by local sampling so documents are extracted
                and chunked once per cache instead of once per call

        Raises:
            NoSourceMaterial: If no chunk could be found for the topic.
        """
        if isinstance(self.strategy, VectorSearch):
            context = await self._vector_search(query, self.strategy.top_k)
            if context is not None:
                return context
            logger.info("vector_fallback_to_local", topic=query.topic.value)

        return await self._local_sample(query, chunk_cache)

    async def _vector_search(self, query: RetrievalQuery, top_k: int) -> RetrievedContext | None:
        if self.vector_index is None or self.embedder is None:
            logger.warning("vector_index_unavailable", topic=query.topic.value)
            return None

        try:
            embedding = await asyncio.to_thread(self.embedder.embed_text, query.search_text())
            hits = await asyncio.to_thread(
                self.vector_index.search, embedding, top_k, query.topic
            )
        except Exception as e:
            logger.warning("vector_search_failed", topic=query.topic.value, error=str(e))
            return None

        if not hits:
            logger.info("vector_search_empty", topic=query.topic.value)
            return None

        chunks, scores = self._fit_to_budget(hits)
        logger.debug(
            "context_retrieved",
            strategy="vector",
            chunks=len(chunks),
            sources=list(dict.fromkeys(c.source for c in chunks)),
        )
        return RetrievedContext(chunks=chunks, strategy="vector", scores=scores)

    async def _local_sample(
        self, query: RetrievalQuery, chunk_cache: ChunkCache | None = None
    ) -> RetrievedContext:
        key = (query.topic, query.subtopic)
        if chunk_cache is not None and key in chunk_cache:
            chunks = chunk_cache[key]
        else:
            chunks = await asyncio.to_thread(self._load_chunks, query)
            if chunk_cache is not None:
                chunk_cache[key] = chunks

        if not chunks:
            raise NoSourceMaterial(
                query.topic.value, f"No usable chunks for topic: {query.topic.value}"
            )

        selected = self._truncate(self._rng.choice(chunks))
        logger.debug(
            "context_retrieved",
            strategy="local",
            chunks=1,
            sources=[selected.source],
            candidates=len(chunks),
        )
        return RetrievedContext(chunks=[selected], strategy="local")

    def _load_chunks(self, query: RetrievalQuery) -> list[TextChunk]:
        documents = self.ingestor.load_documents(query.topic, query.subtopic)
        return [chunk for doc in documents for chunk in self.chunker.chunk_document(doc)]

    def _fit_to_budget(
        self, hits: list[tuple[TextChunk, float]]
    ) -> tuple[list[TextChunk], list[float]]:
        """Keep ranked hits while their combined size fits max_context_chars."""
        chunks: list[TextChunk] = []
        scores: list[float] = []
        total = 0
        for chunk, score in hits:
            if total + len(chunk.content) > self.max_context_chars:
                break
            chunks.append(chunk)
            scores.append(score)
            total += len(chunk.content)

        if not chunks:
            top_chunk, top_score = hits[0]
            return [self._truncate(top_chunk)], [top_score]
        return chunks, scores

    def _truncate(self, chunk: TextChunk) -> TextChunk:
        if len(chunk.content) <= self.max_context_chars:
            return chunk
        return chunk.model_copy(update={"content": chunk.content[: self.max_context_chars]})
