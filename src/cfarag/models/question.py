# src/cfarag/models/question.py
"""Generated question data model."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from cfarag.topics import Difficulty

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class GeneratedQuestion(BaseModel):
    """A validated three-option CFA multiple-choice question."""

    model_config = ConfigDict(strict=True)

    question_text: NonEmptyStr
    option_a: NonEmptyStr
    option_b: NonEmptyStr
    option_c: NonEmptyStr
    correct_answer: Literal["A", "B", "C"]
    explanation: NonEmptyStr
    difficulty_level: Difficulty
    topic_area: NonEmptyStr
    subtopic: str | None = None
    learning_objective_id: str | None = None
    learning_objective_text: str | None = None
    keywords: Annotated[list[NonEmptyStr], Field(min_length=3, max_length=5)]
    source_material: str | None = None
