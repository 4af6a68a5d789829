# src/cfarag/persistence/base.py
"""Abstract base class for question storage."""

from abc import ABC, abstractmethod

from cfarag.models import GeneratedQuestion
from cfarag.topics import TopicArea


class QuestionRepository(ABC):
    """Abstract base class for generated question storage."""

    @abstractmethod
    def insert_questions(
        self, questions: list[GeneratedQuestion], created_by: str | None = None
    ) -> int:
        """Store accepted questions. Returns the number of rows inserted.

        Raises:
            PersistenceError: If storing fails. ``saved`` reports rows already
                committed.
        """
        ...

    @abstractmethod
    def count_questions(self, topic: TopicArea | None = None) -> int:
        """Count stored questions, optionally for one topic."""
        ...

    @abstractmethod
    def list_questions(
        self, topic: TopicArea | None = None, limit: int = 50
    ) -> list[GeneratedQuestion]:
        """List the most recently stored questions."""
        ...
