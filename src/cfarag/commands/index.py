# src/cfarag/commands/index.py
"""Index command - embed the training materials into the vector index."""

from __future__ import annotations

from pathlib import Path

from cfarag.commands.base import CommandStage, IndexResult, ProgressCallback, ProgressUpdate
from cfarag.config import ConfigError, get_app_config
from cfarag.exceptions import InvalidTopic
from cfarag.pipeline import QuestionPipeline
from cfarag.topics import TopicArea, parse_topic


def index(
    topics: list[str] | None = None,
    materials_dir: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
) -> IndexResult:
    """Build or refresh the vector index.

    Args:
        topics: Topics to index (all topics if None or empty)
        materials_dir: Override materials directory
        data_dir: Override data directory
        config_path: Override config file path
        on_progress: Called once per topic

    Returns:
        IndexResult with per-topic outcome and totals
    """
    try:
        selected = [parse_topic(t) for t in topics] if topics else list(TopicArea)
    except InvalidTopic as e:
        return IndexResult(success=False, error=str(e))

    app_config = get_app_config(materials_dir, data_dir, config_path)
    if isinstance(app_config, ConfigError):
        return IndexResult(success=False, error=app_config.message)

    pipeline = QuestionPipeline.from_config(app_config, with_vector_index=True)
    result = IndexResult(success=True)
    try:
        indexer = pipeline.indexer()
        for i, topic in enumerate(selected, start=1):
            if on_progress:
                on_progress(
                    ProgressUpdate(CommandStage.INDEXING, i, len(selected), message=topic.value)
                )
            try:
                report = indexer.index([topic])
            except Exception as e:
                return IndexResult(
                    success=False,
                    error=f"Failed to index {topic.value}: {e}",
                    topics_indexed=result.topics_indexed,
                    topics_skipped=result.topics_skipped,
                    total_documents=result.total_documents,
                    total_chunks=result.total_chunks,
                )
            result.topics_indexed.extend(report.topics)
            result.topics_skipped.extend(report.skipped_topics)
            result.total_documents += report.documents
            result.total_chunks += report.chunks

        result.index_size = pipeline.index_size()
    finally:
        pipeline.close()

    if on_progress:
        on_progress(ProgressUpdate(CommandStage.COMPLETE, len(selected), len(selected)))

    if not result.topics_indexed:
        result.success = False
        result.error = "No topics had readable training material"
    return result
