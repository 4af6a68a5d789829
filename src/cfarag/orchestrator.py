# src/cfarag/orchestrator.py
"""Sequential batch generation with per-attempt error isolation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from cfarag.exceptions import NoSourceMaterial
from cfarag.generation import GenerationClient
from cfarag.models import BatchResult, GeneratedQuestion, RetrievalQuery
from cfarag.prompts import PromptBuilder
from cfarag.retriever import ChunkCache, Retriever
from cfarag.validator import QuestionValidator

logger = structlog.get_logger(__name__)

DEFAULT_DELAY_SECONDS = 2.0

SleepFunc = Callable[[float], Awaitable[None]]


class BatchOrchestrator:
    """Runs ``count`` attempts of retrieve, prompt, generate and validate.

    Attempts run one at a time with ``delay_seconds`` between them. A failed
    attempt is recorded and the loop moves on; only a missing topic aborts
    the batch.
    """

    def __init__(
        self,
        retriever: Retriever,
        prompt_builder: PromptBuilder,
        generation_client: GenerationClient,
        validator: QuestionValidator | None = None,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            retriever: Source material retriever
            prompt_builder: Builds the prompt for each attempt
            generation_client: Sends prompts to the LLM
            validator: Validates replies (default QuestionValidator())
            delay_seconds: Pause between attempts; 0 disables it
            sleep: Awaitable used for the pause, injectable for tests
        """
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        self.retriever = retriever
        self.prompt_builder = prompt_builder
        self.generation_client = generation_client
        self.validator = validator or QuestionValidator()
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def generate_batch(
        self,
        query: RetrievalQuery,
        count: int,
        cancel_event: asyncio.Event | None = None,
    ) -> BatchResult:
        """Generate up to ``count`` questions for a query.

        Never raises on partial failure: errors are collected in the result.

        Raises:
            ValueError: If count is less than 1.
            asyncio.CancelledError: If the surrounding task is cancelled.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        result = BatchResult(requested=count)
        source_files: dict[str, None] = {}
        # Documents are extracted and chunked once per batch
        chunk_cache: ChunkCache = {}

        with structlog.contextvars.bound_contextvars(
            topic=query.topic.value, difficulty=query.difficulty
        ):
            logger.info("batch_started", count=count, subtopic=query.subtopic)

            for attempt in range(1, count + 1):
                if attempt > 1 and self.delay_seconds > 0:
                    await self._sleep(self.delay_seconds)
                if cancel_event is not None and cancel_event.is_set():
                    result.cancelled = True
                    logger.info("batch_cancelled", attempt=attempt)
                    break

                try:
                    question, files = await self._attempt(query, chunk_cache)
                except NoSourceMaterial as e:
                    result.errors.append(str(e))
                    result.aborted = True
                    logger.error("batch_aborted", attempt=attempt, error=str(e))
                    break
                except Exception as e:
                    result.errors.append(f"Question {attempt}: {e}")
                    logger.warning(
                        "attempt_failed",
                        attempt=attempt,
                        error_type=type(e).__name__,
                        error=str(e),
                    )
                    continue

                result.accepted.append(question)
                source_files.update(dict.fromkeys(files))
                logger.info("attempt_succeeded", attempt=attempt)

            result.source_files = list(source_files)
            logger.info(
                "batch_complete",
                requested=count,
                accepted=result.success_count,
                errors=len(result.errors),
                aborted=result.aborted,
                cancelled=result.cancelled,
            )

        return result

    async def _attempt(
        self, query: RetrievalQuery, chunk_cache: ChunkCache
    ) -> tuple[GeneratedQuestion, list[str]]:
        context = await self.retriever.retrieve(query, chunk_cache)
        prompt = self.prompt_builder.build_prompt(query, context)
        raw = await self.generation_client.generate(prompt)
        question = self.validator.validate(
            raw,
            query.topic,
            query.difficulty,
            subtopic=query.subtopic,
            learning_objective_id=query.learning_objective_id,
            learning_objective_text=query.learning_objective_text,
            source_files=context.source_files,
        )
        return question, context.source_files
