# src/cfarag/validator.py
"""Parsing and validation of raw model output into GeneratedQuestion."""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from cfarag.exceptions import SchemaViolation
from cfarag.models import GeneratedQuestion
from cfarag.topics import Difficulty, TopicArea, parse_difficulty, parse_topic

SOURCE_MATERIAL_PREFIX = "RAG: "

_FENCE = re.compile(r"^\s*```(?:json)?\s*\n(.*?)\n\s*```\s*$", re.DOTALL)

# Answer choices beyond A to C, which a three-option question must not carry
_EXTRA_OPTION = re.compile(r"^option_[d-z]$", re.IGNORECASE)

# Fields copied from the model reply; everything else comes from the request.
_REPLY_FIELDS = (
    "question_text",
    "option_a",
    "option_b",
    "option_c",
    "correct_answer",
    "explanation",
    "keywords",
)


def _format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "question"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


class QuestionValidator:
    """Turns raw completion text into a GeneratedQuestion or rejects it.

    No coercion is applied to the model's fields: ``correct_answer`` must be
    exactly ``A``, ``B`` or ``C`` and every text field must be a non-empty
    string. ``topic_area`` and ``difficulty_level`` are always taken from the
    request, never from the reply.
    Replies carrying a fourth option (``option_d`` and up, or an ``options``
    list) are rejected rather than trimmed.
    """

    def parse_json(self, raw: str) -> dict[str, Any]:
        """Parse a single JSON object, tolerating one surrounding code fence.

        Raises:
            SchemaViolation: If the text is not a JSON object.
        """
        text = raw.strip()
        fenced = _FENCE.match(text)
        if fenced:
            text = fenced.group(1).strip()

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaViolation(f"Response is not valid JSON: {e.msg}", raw=raw) from e

        if not isinstance(parsed, dict):
            raise SchemaViolation(
                f"Response must be a JSON object, got {type(parsed).__name__}", raw=raw
            )
        return parsed

    def validate(
        self,
        raw: str,
        expected_topic: TopicArea | str,
        expected_difficulty: Difficulty,
        subtopic: str | None = None,
        learning_objective_id: str | None = None,
        learning_objective_text: str | None = None,
        source_files: list[str] | None = None,
    ) -> GeneratedQuestion:
        """Parse and validate a reply against the request it answers.

        Raises:
            SchemaViolation: If the reply does not satisfy the question schema.
        """
        topic = parse_topic(expected_topic)
        parse_difficulty(expected_difficulty)
        parsed = self.parse_json(raw)

        missing = [name for name in _REPLY_FIELDS if name not in parsed]
        if missing:
            raise SchemaViolation(f"Missing required fields: {', '.join(missing)}", raw=raw)

        extra = sorted(name for name in parsed if name == "options" or _EXTRA_OPTION.match(name))
        if extra:
            raise SchemaViolation(
                f"Question must have exactly three options, got extra fields: {', '.join(extra)}",
                raw=raw,
            )

        data = {name: parsed[name] for name in _REPLY_FIELDS}
        data.update(
            topic_area=topic.value,
            difficulty_level=expected_difficulty,
            subtopic=subtopic,
            learning_objective_id=learning_objective_id,
            learning_objective_text=learning_objective_text,
            source_material=(
                SOURCE_MATERIAL_PREFIX + ", ".join(source_files) if source_files else None
            ),
        )

        try:
            return GeneratedQuestion.model_validate(data)
        except ValidationError as e:
            raise SchemaViolation(
                f"Invalid question: {_format_validation_error(e)}", raw=raw
            ) from e


def parse_and_validate(
    raw: str,
    expected_topic: TopicArea | str,
    expected_difficulty: Difficulty,
    subtopic: str | None = None,
    learning_objective_id: str | None = None,
    learning_objective_text: str | None = None,
    source_files: list[str] | None = None,
) -> GeneratedQuestion:
    """Module-level shortcut for ``QuestionValidator().validate``."""
    return QuestionValidator().validate(
        raw,
        expected_topic,
        expected_difficulty,
        subtopic=subtopic,
        learning_objective_id=learning_objective_id,
        learning_objective_text=learning_objective_text,
        source_files=source_files,
    )
