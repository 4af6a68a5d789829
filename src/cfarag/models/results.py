# src/cfarag/models/results.py
"""Result data models for generation batches."""

from pydantic import BaseModel, Field

from cfarag.models.question import GeneratedQuestion


class BatchResult(BaseModel):
    """Outcome of one generation batch.

    ``aborted`` is set when the batch stopped on a topic-level failure (no
    source material); ``cancelled`` when the caller asked it to stop early.
    """

    requested: int
    accepted: list[GeneratedQuestion] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    source_files: list[str] = Field(default_factory=list)
    aborted: bool = False
    cancelled: bool = False

    @property
    def success_count(self) -> int:
        return len(self.accepted)

    @property
    def failed_count(self) -> int:
        return self.requested - len(self.accepted)
