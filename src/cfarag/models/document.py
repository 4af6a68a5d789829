# src/cfarag/models/document.py
"""Source document and chunk data models."""

from pydantic import BaseModel, ConfigDict

from cfarag.topics import TopicArea


class SourceDocument(BaseModel):
    """Plain text extracted from one training material file."""

    model_config = ConfigDict(frozen=True)

    topic: TopicArea
    file_name: str
    text: str


class TextChunk(BaseModel):
    """A paragraph-aligned slice of a source document.

    ``start`` and ``end`` are character offsets into the document text,
    covering the first through the last paragraph packed into the chunk.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    source: str
    topic: TopicArea
    ordinal: int
    start: int = 0
    end: int = 0

    @property
    def id(self) -> str:
        """Stable identifier, so re-indexing a document overwrites its chunks."""
        return f"{self.topic.slug}/{self.source}#{self.ordinal}"
