"""Question persistence for cfarag."""

from cfarag.persistence.base import QuestionRepository
from cfarag.persistence.sqlite import SQLiteQuestionRepository

__all__ = ["QuestionRepository", "SQLiteQuestionRepository"]
