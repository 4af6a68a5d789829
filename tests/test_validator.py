# tests/test_validator.py
"""Tests for QuestionValidator."""

import json

import pytest
from conftest import make_question_json

from cfarag.exceptions import SchemaViolation
from cfarag.topics import TopicArea
from cfarag.validator import QuestionValidator, parse_and_validate


class TestParseJson:
    def test_plain_object(self):
        assert QuestionValidator().parse_json('{"a": 1}') == {"a": 1}

    def test_fenced_object(self):
        raw = '```json\n{"a": 1}\n```'
        assert QuestionValidator().parse_json(raw) == {"a": 1}

    def test_fence_without_language(self):
        assert QuestionValidator().parse_json('```\n{"a": 1}\n```') == {"a": 1}

    def test_not_json(self):
        with pytest.raises(SchemaViolation, match="not valid JSON") as exc_info:
            QuestionValidator().parse_json("Here is your question!")
        assert exc_info.value.raw == "Here is your question!"

    def test_array_rejected(self):
        with pytest.raises(SchemaViolation, match="JSON object"):
            QuestionValidator().parse_json("[1, 2]")


class TestValidate:
    def test_valid_reply(self):
        q = parse_and_validate(make_question_json(), TopicArea.FIXED_INCOME, "intermediate")
        assert q.correct_answer == "B"
        assert q.topic_area == "Fixed Income"
        assert q.keywords == ["yield to maturity", "bond pricing", "discount rate"]

    def test_request_values_override_reply(self):
        raw = make_question_json(topic_area="Economics", difficulty_level="advanced")
        q = parse_and_validate(
            raw,
            "fixed-income",
            "beginner",
            subtopic="Bond Valuation",
            learning_objective_id="FI-1",
            learning_objective_text="price a bond",
        )
        assert q.topic_area == "Fixed Income"
        assert q.difficulty_level == "beginner"
        assert q.subtopic == "Bond Valuation"
        assert q.learning_objective_id == "FI-1"
        assert q.learning_objective_text == "price a bond"

    def test_source_material_tag(self):
        q = parse_and_validate(
            make_question_json(),
            TopicArea.FIXED_INCOME,
            "intermediate",
            source_files=["a.pdf", "b.pdf"],
        )
        assert q.source_material == "RAG: a.pdf, b.pdf"

    def test_reply_cannot_set_provenance(self):
        raw = make_question_json(source_material="made up", subtopic="invented")
        q = parse_and_validate(raw, TopicArea.FIXED_INCOME, "intermediate")
        assert q.source_material is None
        assert q.subtopic is None

    @pytest.mark.parametrize(
        "field_name",
        ["question_text", "option_a", "option_b", "option_c", "explanation", "keywords"],
    )
    def test_missing_field(self, field_name):
        data = json.loads(make_question_json())
        del data[field_name]
        with pytest.raises(SchemaViolation, match=field_name):
            parse_and_validate(json.dumps(data), TopicArea.FIXED_INCOME, "intermediate")

    @pytest.mark.parametrize("answer", ["D", "b", " B", "", None, 1])
    def test_bad_correct_answer(self, answer):
        with pytest.raises(SchemaViolation, match="correct_answer"):
            parse_and_validate(
                make_question_json(correct_answer=answer), TopicArea.FIXED_INCOME, "intermediate"
            )

    def test_empty_option(self):
        with pytest.raises(SchemaViolation, match="option_b"):
            parse_and_validate(
                make_question_json(option_b="  "), TopicArea.FIXED_INCOME, "intermediate"
            )

    def test_non_string_text(self):
        with pytest.raises(SchemaViolation, match="question_text"):
            parse_and_validate(
                make_question_json(question_text=["a"]), TopicArea.FIXED_INCOME, "intermediate"
            )

    @pytest.mark.parametrize(
        "keywords", [["only", "two"], ["1", "2", "3", "4", "5", "6"], "a, b, c", ["a", 2, "c"]]
    )
    def test_bad_keywords(self, keywords):
        with pytest.raises(SchemaViolation, match="keywords"):
            parse_and_validate(
                make_question_json(keywords=keywords), TopicArea.FIXED_INCOME, "intermediate"
            )

    def test_fenced_reply(self):
        raw = f"```json\n{make_question_json()}\n```"
        q = parse_and_validate(raw, TopicArea.FIXED_INCOME, "intermediate")
        assert q.option_b == "Yield to maturity"

    def test_violation_keeps_raw(self):
        raw = make_question_json(correct_answer="D")
        with pytest.raises(SchemaViolation) as exc_info:
            parse_and_validate(raw, TopicArea.FIXED_INCOME, "intermediate")
        assert exc_info.value.raw == raw

    @pytest.mark.parametrize(
        "extra",
        [
            {"option_d": "Modified duration"},
            {"option_e": "Convexity"},
            {"Option_D": "Macaulay duration"},
            {"options": ["Current yield", "Yield to maturity", "Coupon rate", "Spot rate"]},
        ],
    )
    def test_extra_options_rejected(self, extra):
        raw = make_question_json(correct_answer="C", **extra)
        with pytest.raises(SchemaViolation, match="exactly three options"):
            parse_and_validate(raw, TopicArea.FIXED_INCOME, "intermediate")

    def test_unrelated_extra_fields_ignored(self):
        raw = make_question_json(optional_note="ignored", option_count=3)
        q = parse_and_validate(raw, TopicArea.FIXED_INCOME, "intermediate")
        assert q.correct_answer == "B"
