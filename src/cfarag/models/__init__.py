"""Data models for cfarag."""

from cfarag.models.document import SourceDocument, TextChunk
from cfarag.models.query import RetrievalQuery, RetrievedContext
from cfarag.models.question import GeneratedQuestion
from cfarag.models.results import BatchResult

__all__ = [
    "SourceDocument",
    "TextChunk",
    "RetrievalQuery",
    "RetrievedContext",
    "GeneratedQuestion",
    "BatchResult",
]
