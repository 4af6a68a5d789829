# src/cfarag/indexer.py
"""Build the vector index from the training material tree."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from cfarag.chunker import ParagraphChunker
from cfarag.embedder import Embedder
from cfarag.exceptions import NoSourceMaterial
from cfarag.ingestor import DocumentIngestor
from cfarag.models import TextChunk
from cfarag.topics import TopicArea, parse_topic
from cfarag.vectorstore import VectorIndex

logger = structlog.get_logger(__name__)

EMBED_BATCH_SIZE = 50


@dataclass
class IndexReport:
    """Counts from one indexing run."""

    documents: int = 0
    chunks: int = 0
    topics: list[str] = field(default_factory=list)
    skipped_topics: list[str] = field(default_factory=list)


class MaterialIndexer:
    """Extracts, chunks and embeds topic documents into a VectorIndex."""

    def __init__(
        self,
        ingestor: DocumentIngestor,
        embedder: Embedder,
        vector_index: VectorIndex,
        chunker: ParagraphChunker | None = None,
        batch_size: int = EMBED_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.ingestor = ingestor
        self.embedder = embedder
        self.vector_index = vector_index
        self.chunker = chunker or ParagraphChunker()
        self.batch_size = batch_size

    def index(self, topics: list[TopicArea | str] | None = None) -> IndexReport:
        """Index the given topics (all topics if None).

        Topics without a folder or readable documents are skipped and reported.
        """
        selected = [parse_topic(t) for t in topics] if topics else list(TopicArea)
        report = IndexReport()

        for topic in selected:
            try:
                documents = self.ingestor.load_documents(topic)
            except NoSourceMaterial as e:
                logger.warning("index_topic_skipped", topic=topic.value, error=str(e))
                report.skipped_topics.append(topic.value)
                continue

            chunks: list[TextChunk] = []
            for doc in documents:
                # Drop the previous version so chunks past the new last ordinal go too
                self.vector_index.delete_source(topic, doc.file_name)
                chunks.extend(self.chunker.chunk_document(doc))

            for start in range(0, len(chunks), self.batch_size):
                batch = chunks[start : start + self.batch_size]
                embeddings = self.embedder.embed_chunks(batch)
                self.vector_index.add(batch, embeddings)
                logger.debug(
                    "index_batch_added",
                    topic=topic.value,
                    batch=start // self.batch_size + 1,
                    size=len(batch),
                )

            report.documents += len(documents)
            report.chunks += len(chunks)
            report.topics.append(topic.value)
            logger.info(
                "topic_indexed", topic=topic.value, documents=len(documents), chunks=len(chunks)
            )

        return report
