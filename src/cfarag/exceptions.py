# src/cfarag/exceptions.py
"""Exceptions raised by the question generation pipeline.

Request-level and topic-level errors (``InvalidTopic``, ``NoSourceMaterial``)
propagate to callers. Attempt-level errors (``GenerationError``,
``SchemaViolation``) are captured by the batch orchestrator.
"""

from __future__ import annotations

from pathlib import Path


class CfaRagError(Exception):
    """Base class for all cfarag errors."""


class InvalidTopic(CfaRagError, ValueError):
    """Raised when a topic is not one of the recognized CFA topic areas.

    Attributes:
        value: The rejected topic value.
    """

    def __init__(self, value: object) -> None:
        from cfarag.topics import TopicArea

        choices = ", ".join(t.value for t in TopicArea)
        super().__init__(f"Invalid topic area {value!r}. Must be one of: {choices}")
        self.value = value


class UnknownLearningObjective(CfaRagError, ValueError):
    """Raised when a learning objective ID is not in the catalog for a topic.

    Attributes:
        objective_id: The rejected identifier.
        topic: Display name of the requested topic.
    """

    def __init__(self, objective_id: str, topic: str) -> None:
        super().__init__(f"Unknown learning objective {objective_id!r} for topic: {topic}")
        self.objective_id = objective_id
        self.topic = topic


class NoSourceMaterial(CfaRagError):
    """Raised when no retrievable material exists for a topic.

    Attributes:
        topic: Display name of the topic.
    """

    def __init__(self, topic: str, message: str | None = None) -> None:
        super().__init__(message or f"No source material found for topic: {topic}")
        self.topic = topic


class TopicNotFound(NoSourceMaterial):
    """Raised when a topic's material folder does not exist.

    Attributes:
        topic: Display name of the topic.
        path: The folder that was expected.
    """

    def __init__(self, topic: str, path: Path) -> None:
        super().__init__(topic, f"Training material folder not found for {topic}: {path}")
        self.path = path


class ExtractionError(CfaRagError):
    """Raised when text cannot be extracted from a source document.

    Attributes:
        path: The document that failed.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Failed to extract text from {Path(path).name}: {reason}")
        self.path = Path(path)
        self.reason = reason


class GenerationError(CfaRagError):
    """Raised when the completion service fails for a single attempt."""


class SchemaViolation(CfaRagError):
    """Raised when model output does not match the question schema.

    Attributes:
        raw: The raw model output that was rejected.
    """

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class PersistenceError(CfaRagError):
    """Raised when accepted questions cannot be saved.

    Attributes:
        saved: Number of questions stored before the failure.
    """

    def __init__(self, message: str, saved: int = 0) -> None:
        super().__init__(message)
        self.saved = saved
