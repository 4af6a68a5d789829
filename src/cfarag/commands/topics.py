# src/cfarag/commands/topics.py
"""Topics command - list topic areas and their source files."""

from __future__ import annotations

from pathlib import Path

from cfarag.commands.base import TopicInfo, TopicsResult
from cfarag.config import DEFAULT_MATERIALS_DIR, load_config
from cfarag.ingestor import DocumentIngestor


def topics(
    materials_dir: str | None = None,
    config_path: str | Path | None = None,
) -> TopicsResult:
    """List every topic area with the documents found for it.

    Only needs the materials directory, not provider configuration.
    """
    config = load_config(config_path)
    effective_dir = materials_dir or config.get("materials_dir") or DEFAULT_MATERIALS_DIR

    if not Path(effective_dir).is_dir():
        return TopicsResult(
            success=False,
            materials_dir=str(effective_dir),
            error=f"Training materials directory not found: {effective_dir}",
        )

    available = DocumentIngestor(effective_dir).available_topics()
    return TopicsResult(
        success=True,
        materials_dir=str(effective_dir),
        topics=[
            TopicInfo(topic=topic.value, slug=topic.slug, files=files)
            for topic, files in available.items()
        ],
    )
