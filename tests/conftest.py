"""Shared pytest fixtures."""

import contextlib
import json
import tempfile

import pytest

from cfarag.embedder import Embedder
from cfarag.models import TextChunk
from cfarag.providers import LLMClient
from cfarag.topics import TopicArea
from cfarag.vectorstore import VectorIndex

PARAGRAPH = (
    "A bond's yield to maturity is the single discount rate that equates the present "
    "value of its promised cash flows with its price. Analysts use it to compare bonds "
    "with different coupons and maturities on a common basis."
)


def make_question_json(**overrides) -> str:
    """A model reply that passes validation."""
    data = {
        "question_text": "An analyst is comparing two bonds. Which measure is most likely used?",
        "option_a": "Current yield",
        "option_b": "Yield to maturity",
        "option_c": "Coupon rate",
        "correct_answer": "B",
        "explanation": "B is correct. Yield to maturity accounts for all promised cash flows.",
        "difficulty_level": "intermediate",
        "topic_area": "Fixed Income",
        "keywords": ["yield to maturity", "bond pricing", "discount rate"],
    }
    data.update(overrides)
    return json.dumps(data)


class FakeLLMClient(LLMClient):
    """LLM client that replays canned replies (or raises canned exceptions)."""

    def __init__(self, replies=None) -> None:
        self.replies = list(replies or [])
        self.calls: list[dict] = []

    def complete(self, messages, temperature=None, max_tokens=None, json_mode=False) -> str:
        self.calls.append(
            {
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "json_mode": json_mode,
            }
        )
        reply = self.replies.pop(0) if self.replies else make_question_json()
        if isinstance(reply, BaseException):
            raise reply
        return reply


class FakeEmbedder(Embedder):
    """Embedder that returns fixed vectors."""

    def __init__(self) -> None:
        self.texts: list[str] = []

    def embed_text(self, text: str) -> list[float]:
        self.texts.append(text)
        return [0.1] * 8

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.texts.extend(texts)
        return [[0.1] * 8 for _ in texts]


class InMemoryVectorIndex(VectorIndex):
    """Vector index that upserts by chunk id and returns chunks in insertion order."""

    def __init__(self, chunks=None) -> None:
        self.chunks: list[TextChunk] = list(chunks or [])
        self.searches: list[tuple] = []

    def add(self, chunks, embeddings) -> None:
        assert len(chunks) == len(embeddings)
        new_ids = {c.id for c in chunks}
        self.chunks = [c for c in self.chunks if c.id not in new_ids] + list(chunks)

    def search(self, embedding, k=5, topic=None):
        self.searches.append((embedding, k, topic))
        hits = [c for c in self.chunks if topic is None or c.topic == topic]
        return [(chunk, 1.0 - i * 0.1) for i, chunk in enumerate(hits[:k])]

    def count(self, topic=None) -> int:
        return len([c for c in self.chunks if topic is None or c.topic == topic])

    def delete_source(self, topic, source) -> None:
        self.chunks = [c for c in self.chunks if not (c.topic == topic and c.source == source)]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir

        # Release ChromaDB's shared system cache for this directory
        # See: https://github.com/chroma-core/chroma/issues/5868
        from chromadb.api.shared_system_client import SharedSystemClient

        if hasattr(SharedSystemClient, "_identifier_to_system"):
            for identifier in list(SharedSystemClient._identifier_to_system.keys()):
                if tmpdir in str(identifier):
                    system = SharedSystemClient._identifier_to_system.pop(identifier)
                    with contextlib.suppress(Exception):
                        system.stop()


@pytest.fixture
def materials_dir(tmp_path):
    """A material tree with Fixed Income notes and an empty Derivatives folder."""
    root = tmp_path / "materials"
    fixed_income = root / "Fixed Income"
    fixed_income.mkdir(parents=True)
    (fixed_income / "Fixed-Income Bond Valuation.txt").write_text(
        "\n\n".join([PARAGRAPH] * 4), encoding="utf-8"
    )
    (fixed_income / "Yield Curve Notes.md").write_text(
        "\n\n".join([PARAGRAPH.replace("yield to maturity", "spot rate")] * 3),
        encoding="utf-8",
    )
    (root / "Derivatives").mkdir()
    return root


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def vector_index():
    return InMemoryVectorIndex(
        [
            TextChunk(
                content=PARAGRAPH,
                source="Fixed-Income Bond Valuation.pdf",
                topic=TopicArea.FIXED_INCOME,
                ordinal=0,
            ),
            TextChunk(
                content=PARAGRAPH.replace("bond", "note"),
                source="Yield Curve Notes.pdf",
                topic=TopicArea.FIXED_INCOME,
                ordinal=0,
            ),
        ]
    )


async def no_sleep(seconds: float) -> None:
    """Sleep replacement that records nothing and returns immediately."""
