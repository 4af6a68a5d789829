"""cfarag - RAG-grounded CFA Level 1 question generation.

Questions are generated from the official training materials: source text is
retrieved for a topic, a grounded prompt is sent to an LLM, and the JSON reply
is validated before it is accepted.

Quick Start:
    import asyncio

    from cfarag import QuestionPipeline, RetrievalQuery
    from cfarag.providers.litellm import LiteLLMClient

    pipeline = QuestionPipeline(
        llm_client=LiteLLMClient(model="openai/gpt-4o"),
        materials_dir="./training-materials",
    )
    result = asyncio.run(
        pipeline.generate(RetrievalQuery(topic="Fixed Income", difficulty="beginner"), count=3)
    )
    for question in result.accepted:
        print(question.question_text)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cfarag")
except PackageNotFoundError:
    # Source tree without an installed distribution
    __version__ = "0.0.0+unknown"

from cfarag.chunker import ParagraphChunker, chunk
from cfarag.exceptions import (
    CfaRagError,
    ExtractionError,
    GenerationError,
    InvalidTopic,
    NoSourceMaterial,
    PersistenceError,
    SchemaViolation,
    TopicNotFound,
    UnknownLearningObjective,
)
from cfarag.ingestor import DocumentIngestor
from cfarag.models import (
    BatchResult,
    GeneratedQuestion,
    RetrievalQuery,
    RetrievedContext,
    SourceDocument,
    TextChunk,
)
from cfarag.objectives import LearningObjective, ObjectiveCatalog, default_catalog
from cfarag.orchestrator import BatchOrchestrator
from cfarag.pipeline import QuestionPipeline
from cfarag.prompts import PromptBuilder
from cfarag.retriever import LocalSample, RetrievalStrategy, Retriever, VectorSearch
from cfarag.settings import Settings
from cfarag.topics import DIFFICULTIES, Difficulty, TopicArea, parse_topic
from cfarag.validator import QuestionValidator, parse_and_validate

__all__ = [
    "__version__",
    # Composition root
    "QuestionPipeline",
    "Settings",
    # Components
    "DocumentIngestor",
    "ParagraphChunker",
    "chunk",
    "Retriever",
    "RetrievalStrategy",
    "VectorSearch",
    "LocalSample",
    "PromptBuilder",
    "QuestionValidator",
    "parse_and_validate",
    "BatchOrchestrator",
    "ObjectiveCatalog",
    "LearningObjective",
    "default_catalog",
    # Models
    "TopicArea",
    "Difficulty",
    "DIFFICULTIES",
    "parse_topic",
    "SourceDocument",
    "TextChunk",
    "RetrievalQuery",
    "RetrievedContext",
    "GeneratedQuestion",
    "BatchResult",
    # Exceptions
    "CfaRagError",
    "InvalidTopic",
    "UnknownLearningObjective",
    "NoSourceMaterial",
    "TopicNotFound",
    "ExtractionError",
    "GenerationError",
    "SchemaViolation",
    "PersistenceError",
]
