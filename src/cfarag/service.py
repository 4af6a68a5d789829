# src/cfarag/service.py
"""Caller-facing generation service shared by the API and the CLI."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Literal

import structlog
from pydantic import BaseModel, Field

from cfarag.exceptions import PersistenceError
from cfarag.models import GeneratedQuestion, RetrievalQuery
from cfarag.objectives import ObjectiveCatalog, default_catalog
from cfarag.pipeline import QuestionPipeline
from cfarag.topics import Difficulty, TopicArea, parse_topic

logger = structlog.get_logger(__name__)

MAX_REQUEST_COUNT = 50

Outcome = Literal["ok", "no_source_material", "save_failed"]


class GenerateRequest(BaseModel):
    """Request to generate a batch of questions for one topic."""

    topic_area: str = Field(..., description="Topic display name or slug")
    difficulty: Difficulty = "intermediate"
    subtopic: str | None = None
    learning_objective_id: str | None = None
    learning_objective_text: str | None = None
    count: int = Field(default=1, ge=1, le=MAX_REQUEST_COUNT)
    save_to_database: bool = False
    created_by: str | None = None

    def to_query(self, catalog: ObjectiveCatalog | None = None) -> RetrievalQuery:
        """Build the retrieval query.

        A learning objective ID given without its text is looked up in
        ``catalog`` (the bundled one if None) and must belong to the topic.
        Text given by the caller is used as is.

        Raises:
            InvalidTopic: If the topic is not recognized.
            UnknownLearningObjective: If the ID is not a catalog objective of the topic.
        """
        query = RetrievalQuery(
            topic=self.topic_area,  # type: ignore[arg-type]
            difficulty=self.difficulty,
            subtopic=self.subtopic,
            learning_objective_id=self.learning_objective_id,
            learning_objective_text=self.learning_objective_text,
        )
        if query.learning_objective_id and not query.learning_objective_text:
            catalog = catalog if catalog is not None else default_catalog()
            objective = catalog.resolve(query.learning_objective_id, query.topic)
            query = replace(query, learning_objective_text=objective.text)
        return query


class GenerateResponse(BaseModel):
    """Questions produced for a GenerateRequest."""

    questions: list[GeneratedQuestion] = Field(default_factory=list)
    count: int = 0
    saved: bool = False
    saved_count: int | None = None
    errors: list[str] = Field(default_factory=list)
    source_files: list[str] = Field(default_factory=list)
    error: str | None = None
    outcome: Outcome = Field(default="ok", exclude=True)


class QuestionService:
    """Runs generation batches and optionally saves accepted questions."""

    def __init__(self, pipeline: QuestionPipeline) -> None:
        self.pipeline = pipeline

    async def generate(
        self,
        request: GenerateRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> GenerateResponse:
        """Generate questions for a request.

        Raises:
            InvalidTopic: If the topic is not recognized.
            UnknownLearningObjective: If the objective ID is not in the catalog for the topic.
            ValueError: If count exceeds the configured batch limit.
        """
        query = request.to_query()
        result = await self.pipeline.generate(query, request.count, cancel_event)

        response = GenerateResponse(
            questions=result.accepted,
            count=result.success_count,
            errors=result.errors,
            source_files=result.source_files,
        )

        if result.aborted and not result.accepted:
            response.error = result.errors[-1] if result.errors else "No source material found"
            response.outcome = "no_source_material"
            return response

        if request.save_to_database and result.accepted:
            await self._save(response, request.created_by)

        return response

    async def _save(self, response: GenerateResponse, created_by: str | None) -> None:
        repository = self.pipeline.repository
        if repository is None:
            response.error = "Question storage is not configured"
            response.outcome = "save_failed"
            return

        try:
            saved = await asyncio.to_thread(
                repository.insert_questions, response.questions, created_by
            )
        except PersistenceError as e:
            response.saved_count = e.saved
            response.error = f"Questions generated but failed to save: {e}"
            response.outcome = "save_failed"
            return

        response.saved = True
        response.saved_count = saved

    def status(self) -> dict:
        """Describe the generation endpoint and the retrieval setup."""
        settings = self.pipeline.settings
        index_size = self.pipeline.index_size()
        return {
            "endpoint": "/api/admin/generate-rag-question",
            "method": "POST",
            "retrieval_strategy": settings.retrieval_strategy,
            "vector_index_configured": self.pipeline.vector_index is not None,
            "vector_index_size": index_size,
            "rag_ready": settings.retrieval_strategy == "local" or index_size > 0,
            "max_count": min(settings.max_batch_size, MAX_REQUEST_COUNT),
            "topics": [topic.value for topic in TopicArea],
        }

    async def topics(self) -> dict[str, list[str]]:
        """Map topic display names to their source file names."""
        available = await asyncio.to_thread(self.pipeline.ingestor.available_topics)
        return {topic.value: files for topic, files in available.items()}

    def objectives(self, topic: TopicArea | str) -> list[dict[str, str]]:
        """List the catalog's learning objectives for a topic.

        Raises:
            InvalidTopic: If the topic is not recognized.
        """
        return [
            {"id": o.id, "reading": o.reading, "text": o.text}
            for o in default_catalog().for_topic(parse_topic(topic))
        ]
