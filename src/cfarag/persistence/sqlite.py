# src/cfarag/persistence/sqlite.py
"""SQLite question repository implementation."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import structlog

from cfarag.exceptions import PersistenceError
from cfarag.models import GeneratedQuestion
from cfarag.persistence.base import QuestionRepository
from cfarag.topics import TopicArea

logger = structlog.get_logger(__name__)

INSERT_BATCH_SIZE = 25
QUESTION_SOURCE = "RAG-Generated"

_COLUMNS = (
    "question_text",
    "option_a",
    "option_b",
    "option_c",
    "correct_answer",
    "explanation",
    "difficulty_level",
    "topic_area",
    "subtopic",
    "learning_objective_id",
    "learning_objective_text",
    "keywords",
    "source_material",
)


class SQLiteQuestionRepository(QuestionRepository):
    """SQLite-based question repository.

    Rows are inserted in batches of 25, one transaction per batch, and
    marked active with ``source = 'RAG-Generated'``.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite repository."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS questions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    question_text TEXT NOT NULL,
                    option_a TEXT NOT NULL,
                    option_b TEXT NOT NULL,
                    option_c TEXT NOT NULL,
                    correct_answer TEXT NOT NULL CHECK (correct_answer IN ('A', 'B', 'C')),
                    explanation TEXT NOT NULL,
                    difficulty_level TEXT NOT NULL,
                    topic_area TEXT NOT NULL,
                    subtopic TEXT,
                    learning_objective_id TEXT,
                    learning_objective_text TEXT,
                    keywords TEXT NOT NULL,
                    source_material TEXT,
                    source TEXT NOT NULL,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_by TEXT,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_topic_area ON questions(topic_area)")
            conn.commit()

    def insert_questions(
        self, questions: list[GeneratedQuestion], created_by: str | None = None
    ) -> int:
        """Insert questions in batches of 25."""
        if not questions:
            return 0

        created_at = datetime.now(timezone.utc).isoformat()
        placeholders = ",".join("?" * (len(_COLUMNS) + 4))
        sql = (
            f"INSERT INTO questions ({', '.join(_COLUMNS)}, source, is_active, created_by, "
            f"created_at) VALUES ({placeholders})"
        )

        saved = 0
        for start in range(0, len(questions), INSERT_BATCH_SIZE):
            batch = questions[start : start + INSERT_BATCH_SIZE]
            rows = [self._to_row(q) + (QUESTION_SOURCE, 1, created_by, created_at) for q in batch]
            try:
                with sqlite3.connect(self.db_path) as conn:
                    conn.executemany(sql, rows)
                    conn.commit()
            except sqlite3.Error as e:
                batch_number = start // INSERT_BATCH_SIZE + 1
                logger.error(
                    "question_insert_failed", batch=batch_number, saved=saved, error=str(e)
                )
                raise PersistenceError(
                    f"Failed to save batch {batch_number}: {e}", saved=saved
                ) from e
            saved += len(batch)

        logger.info("questions_saved", count=saved, created_by=created_by)
        return saved

    def count_questions(self, topic: TopicArea | None = None) -> int:
        """Count stored questions."""
        with sqlite3.connect(self.db_path) as conn:
            if topic is None:
                cursor = conn.execute("SELECT COUNT(id) FROM questions")
            else:
                cursor = conn.execute(
                    "SELECT COUNT(id) FROM questions WHERE topic_area = ?", (topic.value,)
                )
            count = cursor.fetchone()
            return count[0] if count else 0

    def list_questions(
        self, topic: TopicArea | None = None, limit: int = 50
    ) -> list[GeneratedQuestion]:
        """List the most recently inserted questions, newest first."""
        sql = f"SELECT {', '.join(_COLUMNS)} FROM questions"
        params: tuple = ()
        if topic is not None:
            sql += " WHERE topic_area = ?"
            params = (topic.value,)
        sql += " ORDER BY id DESC LIMIT ?"

        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(sql, params + (limit,))
            return [self._from_row(row) for row in cursor.fetchall()]

    @staticmethod
    def _to_row(question: GeneratedQuestion) -> tuple:
        data = question.model_dump()
        data["keywords"] = json.dumps(data["keywords"])
        return tuple(data[name] for name in _COLUMNS)

    @staticmethod
    def _from_row(row: tuple) -> GeneratedQuestion:
        data = dict(zip(_COLUMNS, row, strict=True))
        data["keywords"] = json.loads(data["keywords"])
        return GeneratedQuestion.model_validate(data)
