# src/cfarag/commands/__init__.py
"""UI-agnostic command layer for cfarag.

Commands return data structures, allowing the CLI to render results.

Usage:
    from cfarag.commands import generate, topics

    result = generate.generate("Fixed Income", count=3)
    result = topics.topics()
"""

from cfarag.commands import generate, index, objectives, topics
from cfarag.commands.base import (
    CommandResult,
    CommandStage,
    GenerateResult,
    IndexResult,
    ObjectivesResult,
    ProgressCallback,
    ProgressUpdate,
    TopicInfo,
    TopicsResult,
)

__all__ = [
    # Command modules
    "generate",
    "index",
    "objectives",
    "topics",
    # Types
    "CommandResult",
    "CommandStage",
    "GenerateResult",
    "IndexResult",
    "ObjectivesResult",
    "ProgressCallback",
    "ProgressUpdate",
    "TopicInfo",
    "TopicsResult",
]
