# src/cfarag/commands/base.py
"""Base types for the commands layer.

Commands return result dataclasses instead of raising, so the CLI can
render success and failure the same way.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from cfarag.models import GeneratedQuestion
from cfarag.objectives import LearningObjective


class CommandStage(Enum):
    """Stages of command execution for progress reporting."""

    LOADING = "Loading"
    INDEXING = "Indexing"
    GENERATING = "Generating"
    SAVING = "Saving"
    COMPLETE = "Complete"


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        stage: Current stage of the operation
        current: Current item number (1-indexed)
        total: Total number of items (0 for indeterminate)
        message: Optional status message
    """

    stage: CommandStage
    current: int
    total: int
    message: str | None = None

    @property
    def is_indeterminate(self) -> bool:
        """True if progress is indeterminate (total unknown)."""
        return self.total == 0

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 if indeterminate."""
        if self.total == 0:
            return 0
        return int(100 * self.current / self.total)


ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class CommandResult:
    """Base result for all commands."""

    success: bool
    error: str | None = None


@dataclass
class GenerateResult(CommandResult):
    """Result of the generate command.

    Attributes:
        topic: Topic display name
        requested: Number of attempts requested
        questions: Accepted questions
        errors: One message per failed attempt
        source_files: Files that grounded accepted questions
        saved_count: Rows saved, None if saving was not requested
        warnings: Config warnings to show the user
    """

    topic: str = ""
    requested: int = 0
    questions: list[GeneratedQuestion] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    source_files: list[str] = field(default_factory=list)
    saved_count: int | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class IndexResult(CommandResult):
    """Result of the index command."""

    topics_indexed: list[str] = field(default_factory=list)
    topics_skipped: list[str] = field(default_factory=list)
    total_documents: int = 0
    total_chunks: int = 0
    index_size: int = 0


@dataclass
class TopicInfo:
    """Source files available for one topic."""

    topic: str
    slug: str
    files: list[str] = field(default_factory=list)


@dataclass
class TopicsResult(CommandResult):
    """Result of the topics command."""

    materials_dir: str = ""
    topics: list[TopicInfo] = field(default_factory=list)


@dataclass
class ObjectivesResult(CommandResult):
    """Result of the objectives command."""

    topic: str = ""
    objectives: list[LearningObjective] = field(default_factory=list)
