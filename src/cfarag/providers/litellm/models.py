# src/cfarag/providers/litellm/models.py
"""Curated model constants for the LiteLLM provider.

Any valid LiteLLM model string can be passed instead.
"""


class ChatModels:
    """Chat/completion models suitable for JSON question generation."""

    # OpenAI
    GPT_4O = "openai/gpt-4o"
    GPT_4O_MINI = "openai/gpt-4o-mini"

    # Anthropic
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"

    # Google Gemini
    GEMINI_15_PRO = "gemini/gemini-1.5-pro"
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"
    ADA_002 = "openai/text-embedding-ada-002"

    # Google Gemini
    GEMINI_004 = "gemini/text-embedding-004"
