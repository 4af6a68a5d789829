# src/cfarag/pipeline.py
"""Composition root for the question generation pipeline."""

from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING

import structlog

from cfarag.chunker import ParagraphChunker
from cfarag.generation import GenerationClient
from cfarag.indexer import MaterialIndexer
from cfarag.ingestor import DocumentIngestor
from cfarag.orchestrator import BatchOrchestrator, SleepFunc
from cfarag.prompts import PromptBuilder
from cfarag.retriever import LocalSample, RetrievalStrategy, Retriever, VectorSearch
from cfarag.settings import Settings
from cfarag.validator import QuestionValidator

if TYPE_CHECKING:
    from pathlib import Path

    from cfarag.config import AppConfig
    from cfarag.embedder import Embedder
    from cfarag.loaders import LoaderRegistry
    from cfarag.models import BatchResult, RetrievalQuery
    from cfarag.persistence import QuestionRepository
    from cfarag.providers import LLMClient
    from cfarag.vectorstore import VectorIndex

logger = structlog.get_logger(__name__)


class QuestionPipeline:
    """Wires the ingestor, retriever, generation client and orchestrator.

    The pipeline owns the collaborators it is given and releases them in
    ``close()``. Build it once per process; batches share no mutable state
    beyond the retriever's random source.

    Example:
        from cfarag import QuestionPipeline, RetrievalQuery
        from cfarag.providers.litellm import LiteLLMClient

        pipeline = QuestionPipeline(
            llm_client=LiteLLMClient(model="openai/gpt-4o"),
            materials_dir="./training-materials",
        )
        result = await pipeline.generate(RetrievalQuery(topic="Fixed Income"), count=3)
    """

    def __init__(
        self,
        *,
        llm_client: LLMClient,
        materials_dir: str | Path,
        settings: Settings | None = None,
        embedder: Embedder | None = None,
        vector_index: VectorIndex | None = None,
        repository: QuestionRepository | None = None,
        loader_registry: LoaderRegistry | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Create a pipeline.

        Args:
            llm_client: Completion provider
            materials_dir: Root of the training material tree
            settings: Behavioral settings (defaults if None)
            embedder: Query/chunk embedder, required for vector retrieval and indexing
            vector_index: Chunk index, required for vector retrieval and indexing
            repository: Question storage, required for saving
            loader_registry: Document loaders (PDF + text if None)
            sleep: Awaitable used between attempts
        """
        self.settings = settings if settings is not None else Settings()
        self.llm_client = llm_client
        self.embedder = embedder
        self.vector_index = vector_index
        self.repository = repository

        self.ingestor = DocumentIngestor(materials_dir, loader_registry)
        self.chunker = ParagraphChunker(
            max_chunk_size=self.settings.max_chunk_size,
            min_chunk_size=self.settings.min_chunk_size,
            min_paragraph_chars=self.settings.min_paragraph_chars,
        )
        self.retriever = Retriever(
            self.ingestor,
            chunker=self.chunker,
            strategy=self._strategy(),
            vector_index=vector_index,
            embedder=embedder,
            max_context_chars=self.settings.max_context_chars,
        )
        self.generation_client = GenerationClient(
            llm_client,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            timeout=self.settings.generation_timeout,
        )
        self.orchestrator = BatchOrchestrator(
            self.retriever,
            PromptBuilder(),
            self.generation_client,
            QuestionValidator(),
            delay_seconds=self.settings.inter_call_delay,
            sleep=sleep,
        )

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        with_vector_index: bool | None = None,
    ) -> QuestionPipeline:
        """Build a LiteLLM-backed pipeline with Chroma and SQLite under data_dir.

        Args:
            config: Resolved application config
            with_vector_index: Open the Chroma index. Defaults to True when the
                retrieval strategy is "vector".
        """
        from cfarag.embedder import ClientEmbedder
        from cfarag.persistence import SQLiteQuestionRepository
        from cfarag.providers.litellm import LiteLLMClient, LiteLLMEmbeddingClient
        from cfarag.vectorstore import ChromaChunkIndex

        settings = config.settings
        if with_vector_index is None:
            with_vector_index = settings.retrieval_strategy == "vector"

        embedder = None
        vector_index = None
        if with_vector_index:
            embedder = ClientEmbedder(
                LiteLLMEmbeddingClient(model=config.embedding_model, num_retries=3)
            )
            vector_index = ChromaChunkIndex(os.path.join(config.data_dir, "chroma"))

        return cls(
            llm_client=LiteLLMClient(
                model=config.llm_model,
                num_retries=settings.num_retries,
                api_key=config.llm_api_key,
            ),
            materials_dir=config.materials_dir,
            settings=settings,
            embedder=embedder,
            vector_index=vector_index,
            repository=SQLiteQuestionRepository(os.path.join(config.data_dir, "questions.db")),
        )

    def _strategy(self) -> RetrievalStrategy:
        if self.settings.retrieval_strategy == "vector":
            return VectorSearch(top_k=self.settings.top_k)
        return LocalSample(seed=self.settings.random_seed)

    async def generate(
        self,
        query: RetrievalQuery,
        count: int = 1,
        cancel_event: asyncio.Event | None = None,
    ) -> BatchResult:
        """Generate a batch of questions. See BatchOrchestrator.generate_batch."""
        if count > self.settings.max_batch_size:
            raise ValueError(
                f"count must be at most {self.settings.max_batch_size}, got {count}"
            )
        return await self.orchestrator.generate_batch(query, count, cancel_event)

    def indexer(self) -> MaterialIndexer:
        """Create an indexer over this pipeline's materials and vector index.

        Raises:
            ValueError: If no embedder or vector index is configured.
        """
        if self.embedder is None or self.vector_index is None:
            raise ValueError("Indexing requires an embedder and a vector index")
        return MaterialIndexer(
            self.ingestor,
            self.embedder,
            self.vector_index,
            chunker=self.chunker,
        )

    def index_size(self) -> int:
        """Number of indexed chunks (0 without a vector index)."""
        if self.vector_index is None:
            return 0
        return self.vector_index.count()

    def close(self) -> None:
        """Release the vector index."""
        if self.vector_index is not None:
            self.vector_index.close()
            logger.debug("vector_index_closed")
