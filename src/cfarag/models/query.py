# src/cfarag/models/query.py
"""Retrieval query and retrieved context models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

from cfarag.models.document import TextChunk
from cfarag.topics import Difficulty, TopicArea, parse_difficulty, parse_topic


@dataclass(frozen=True)
class RetrievalQuery:
    """What to retrieve source material for.

    The topic is resolved on construction, so an unknown topic fails with
    ``InvalidTopic`` before any I/O happens.

    Attributes:
        topic: Topic area (display name, slug, or TopicArea)
        difficulty: beginner, intermediate or advanced
        subtopic: Optional reading or subtopic name
        learning_objective_id: Optional learning objective identifier
        learning_objective_text: Optional learning objective statement
    """

    topic: TopicArea
    difficulty: Difficulty = "intermediate"
    subtopic: str | None = None
    learning_objective_id: str | None = None
    learning_objective_text: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "topic", parse_topic(self.topic))
        parse_difficulty(self.difficulty)
        for name in ("subtopic", "learning_objective_id", "learning_objective_text"):
            value = getattr(self, name)
            if value is not None and not value.strip():
                object.__setattr__(self, name, None)

    def search_text(self) -> str:
        """Text used to embed the query for similarity search."""
        parts = [f"CFA Level 1 {self.topic.value}"]
        if self.subtopic:
            parts.append(self.subtopic)
        if self.learning_objective_text:
            parts.append(self.learning_objective_text)
        if self.difficulty == "beginner":
            parts.append("fundamental concepts basics introduction")
        elif self.difficulty == "advanced":
            parts.append("advanced complex application")
        return " ".join(parts)


class RetrievedContext(BaseModel):
    """Chunks selected to ground a single generation request."""

    chunks: list[TextChunk] = Field(default_factory=list)
    strategy: Literal["vector", "local"] = "local"
    scores: list[float] = Field(default_factory=list)

    @property
    def contents(self) -> list[str]:
        return [chunk.content for chunk in self.chunks]

    @property
    def source_files(self) -> list[str]:
        """File names that contributed chunks, deduplicated in order."""
        return list(dict.fromkeys(chunk.source for chunk in self.chunks))

    @property
    def total_chars(self) -> int:
        return sum(len(chunk.content) for chunk in self.chunks)

    @property
    def is_empty(self) -> bool:
        return not self.chunks
