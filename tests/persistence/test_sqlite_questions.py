# tests/persistence/test_sqlite_questions.py
"""Tests for SQLiteQuestionRepository."""

import os
import sqlite3
from unittest.mock import patch

import pytest

from cfarag.exceptions import PersistenceError
from cfarag.models import GeneratedQuestion
from cfarag.persistence import QuestionRepository, SQLiteQuestionRepository
from cfarag.topics import TopicArea


def make_question(i: int = 0, topic: str = "Fixed Income") -> GeneratedQuestion:
    return GeneratedQuestion(
        question_text=f"Question {i}?",
        option_a="A option",
        option_b="B option",
        option_c="C option",
        correct_answer="A",
        explanation="A is correct.",
        difficulty_level="intermediate",
        topic_area=topic,
        keywords=["k1", "k2", "k3"],
        source_material="RAG: notes.pdf",
    )


@pytest.fixture
def repository(tmp_path):
    return SQLiteQuestionRepository(os.path.join(tmp_path, "db", "questions.db"))


class TestSQLiteQuestionRepository:
    def test_is_repository(self, repository):
        assert isinstance(repository, QuestionRepository)

    def test_insert_and_list(self, repository):
        assert repository.insert_questions([make_question(1), make_question(2)], "admin") == 2
        assert repository.count_questions() == 2

        listed = repository.list_questions()
        assert [q.question_text for q in listed] == ["Question 2?", "Question 1?"]
        assert listed[0].keywords == ["k1", "k2", "k3"]
        assert listed[0].source_material == "RAG: notes.pdf"

    def test_rows_are_marked(self, repository):
        repository.insert_questions([make_question()], created_by="admin@example.com")
        with sqlite3.connect(repository.db_path) as conn:
            row = conn.execute("SELECT source, is_active, created_by FROM questions").fetchone()
        assert row == ("RAG-Generated", 1, "admin@example.com")

    def test_empty_insert(self, repository):
        assert repository.insert_questions([]) == 0

    def test_inserts_in_batches_of_25(self, repository):
        questions = [make_question(i) for i in range(60)]
        with patch("cfarag.persistence.sqlite.sqlite3.connect", wraps=sqlite3.connect) as connect:
            assert repository.insert_questions(questions) == 60
        assert connect.call_count == 3
        assert repository.count_questions() == 60

    def test_count_and_list_by_topic(self, repository):
        repository.insert_questions(
            [make_question(1), make_question(2, topic="Economics"), make_question(3)]
        )
        assert repository.count_questions(TopicArea.FIXED_INCOME) == 2
        assert repository.count_questions(TopicArea.ECONOMICS) == 1
        assert len(repository.list_questions(TopicArea.ECONOMICS)) == 1
        assert len(repository.list_questions(limit=1)) == 1

    def test_failure_reports_saved_rows(self, repository):
        questions = [make_question(i) for i in range(30)]
        real_connect = sqlite3.connect
        calls = {"n": 0}

        def flaky_connect(*args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise sqlite3.OperationalError("database is locked")
            return real_connect(*args, **kwargs)

        with patch("cfarag.persistence.sqlite.sqlite3.connect", side_effect=flaky_connect):
            with pytest.raises(PersistenceError, match="database is locked") as exc_info:
                repository.insert_questions(questions)

        assert exc_info.value.saved == 25
        assert repository.count_questions() == 25
