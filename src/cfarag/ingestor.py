# src/cfarag/ingestor.py
"""Document ingestion from the training material tree.

The material tree has one folder per topic area, each holding PDF (or text)
files:

    materials/
        Fixed Income/
            Fixed-Income Bond Valuation.pdf
            ...
        Derivatives/
            ...
"""

from __future__ import annotations

from pathlib import Path

import structlog

from cfarag.exceptions import ExtractionError, NoSourceMaterial, TopicNotFound
from cfarag.loaders import LoaderRegistry
from cfarag.models import SourceDocument
from cfarag.topics import TopicArea, parse_topic

logger = structlog.get_logger(__name__)

SUBTOPIC_MATCH_PREFIX = 15


class DocumentIngestor:
    """Lists and extracts source documents for a topic."""

    def __init__(
        self,
        materials_dir: str | Path,
        loader_registry: LoaderRegistry | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            materials_dir: Root of the material tree (one folder per topic)
            loader_registry: Loaders used for text extraction. Defaults to
                PDF + text loaders.
        """
        self.materials_dir = Path(materials_dir)
        self.loader_registry = loader_registry or LoaderRegistry.default()

    def topic_dir(self, topic: TopicArea | str) -> Path:
        """Resolve the folder for a topic.

        Uses ``<materials_dir>/<display name>`` and otherwise falls back to a
        case-insensitive match among existing folders.

        Raises:
            TopicNotFound: If no folder exists for the topic.
        """
        topic = parse_topic(topic)
        expected = self.materials_dir / topic.value
        if expected.is_dir():
            return expected

        if self.materials_dir.is_dir():
            for candidate in sorted(self.materials_dir.iterdir()):
                if candidate.is_dir() and candidate.name.lower() in (
                    topic.value.lower(),
                    topic.slug,
                ):
                    return candidate

        raise TopicNotFound(topic.value, expected)

    def list_source_files(
        self,
        topic: TopicArea | str,
        subtopic_hint: str | None = None,
    ) -> list[Path]:
        """List supported documents for a topic, sorted by file name.

        With a subtopic hint, keep only files whose name contains the first
        15 characters of the hint (case-insensitive). If nothing matches, the
        full topic list is returned instead.

        Raises:
            TopicNotFound: If the topic folder does not exist.
        """
        folder = self.topic_dir(topic)
        files = sorted(
            (p for p in folder.iterdir() if p.is_file() and self.loader_registry.supports(str(p))),
            key=lambda p: p.name,
        )

        if subtopic_hint and subtopic_hint.strip():
            needle = subtopic_hint.strip().lower()[:SUBTOPIC_MATCH_PREFIX]
            matching = [p for p in files if needle in p.name.lower()]
            if matching:
                return matching
            logger.debug("subtopic_hint_unmatched", folder=str(folder), hint=subtopic_hint)

        return files

    def extract_text(self, path: str | Path) -> str:
        """Extract plain text from a single document.

        Raises:
            ExtractionError: If the file is unreadable, unsupported, or empty.
        """
        path = Path(path)
        if not self.loader_registry.supports(str(path)):
            raise ExtractionError(path, f"unsupported format '{path.suffix}'")

        try:
            text = self.loader_registry.extract_text(str(path))
        except FileNotFoundError as e:
            raise ExtractionError(path, "file not found") from e
        except Exception as e:
            raise ExtractionError(path, str(e) or type(e).__name__) from e

        if not text.strip():
            raise ExtractionError(path, "no text could be extracted")
        return text

    def load_documents(
        self,
        topic: TopicArea | str,
        subtopic_hint: str | None = None,
    ) -> list[SourceDocument]:
        """Extract every document for a topic, skipping files that fail.

        Raises:
            TopicNotFound: If the topic folder does not exist.
            NoSourceMaterial: If the folder is empty or every file failed.
        """
        topic = parse_topic(topic)
        files = self.list_source_files(topic, subtopic_hint)
        if not files:
            raise NoSourceMaterial(topic.value, f"No documents found for topic: {topic.value}")

        documents = []
        for path in files:
            try:
                text = self.extract_text(path)
            except ExtractionError as e:
                logger.warning("extraction_failed", file=path.name, topic=topic.value, error=str(e))
                continue
            documents.append(SourceDocument(topic=topic, file_name=path.name, text=text))

        if not documents:
            raise NoSourceMaterial(
                topic.value, f"Failed to extract text from any document for topic: {topic.value}"
            )

        logger.info("documents_loaded", topic=topic.value, documents=len(documents))
        return documents

    def available_topics(self) -> dict[TopicArea, list[str]]:
        """Map every topic to its document file names (empty if no folder)."""
        result: dict[TopicArea, list[str]] = {}
        for topic in TopicArea:
            try:
                result[topic] = [p.name for p in self.list_source_files(topic)]
            except TopicNotFound:
                result[topic] = []
        return result
