"""LiteLLM provider clients for cfarag.

Usage:
    from cfarag.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GPT_4O)
"""

from cfarag.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from cfarag.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
