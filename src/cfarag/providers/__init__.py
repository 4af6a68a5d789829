"""Provider implementations for cfarag.

- LLMClient: Abstract base class for LLM completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations in cfarag.providers.litellm
"""

from cfarag.providers.base import EmbeddingClient, LLMClient
from cfarag.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
