# src/cfarag/commands/generate.py
"""Generate command - create grounded questions for a topic."""

from __future__ import annotations

import asyncio
from pathlib import Path

from cfarag.commands.base import GenerateResult
from cfarag.config import ConfigError, get_app_config
from cfarag.exceptions import InvalidTopic
from cfarag.pipeline import QuestionPipeline
from cfarag.service import GenerateRequest, QuestionService
from cfarag.topics import parse_topic


def generate(
    topic: str,
    difficulty: str = "intermediate",
    count: int = 1,
    subtopic: str | None = None,
    learning_objective_id: str | None = None,
    learning_objective_text: str | None = None,
    save: bool = False,
    created_by: str | None = None,
    no_delay: bool = False,
    materials_dir: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> GenerateResult:
    """Generate questions for a topic.

    Args:
        topic: Topic display name or slug
        difficulty: beginner, intermediate or advanced
        count: Number of attempts
        subtopic: Optional subtopic, also used to pick matching files
        learning_objective_id: Optional learning objective ID
        learning_objective_text: Optional learning objective statement
        save: Save accepted questions to the question database
        created_by: Recorded with saved questions
        no_delay: Skip the pause between attempts
        materials_dir: Override materials directory
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        GenerateResult with accepted questions and per-attempt errors
    """
    try:
        topic_area = parse_topic(topic)
    except InvalidTopic as e:
        return GenerateResult(success=False, topic=topic, requested=count, error=str(e))

    app_config = get_app_config(materials_dir, data_dir, config_path)
    if isinstance(app_config, ConfigError):
        error = app_config.message
        if app_config.suggestion:
            error = f"{error} {app_config.suggestion}"
        return GenerateResult(success=False, topic=topic_area.value, requested=count, error=error)

    if no_delay:
        app_config.settings = app_config.settings.model_copy(update={"inter_call_delay": 0.0})

    try:
        request = GenerateRequest(
            topic_area=topic_area.value,
            difficulty=difficulty,  # type: ignore[arg-type]
            subtopic=subtopic,
            learning_objective_id=learning_objective_id,
            learning_objective_text=learning_objective_text,
            count=count,
            save_to_database=save,
            created_by=created_by,
        )
    except ValueError as e:
        return GenerateResult(
            success=False, topic=topic_area.value, requested=count, error=f"Invalid request: {e}"
        )

    pipeline = QuestionPipeline.from_config(app_config)
    try:
        response = asyncio.run(QuestionService(pipeline).generate(request))
    except ValueError as e:
        return GenerateResult(success=False, topic=topic_area.value, requested=count, error=str(e))
    finally:
        pipeline.close()

    return GenerateResult(
        success=response.outcome == "ok" and response.count > 0,
        error=response.error or (None if response.count else "No questions were generated"),
        topic=topic_area.value,
        requested=count,
        questions=response.questions,
        errors=response.errors,
        source_files=response.source_files,
        saved_count=response.saved_count,
        warnings=app_config.warnings or [],
    )
