# src/cfarag/providers/litellm/client.py
"""LiteLLM client implementations for LLM and embedding APIs."""

from typing import Any

import litellm

from cfarag.providers.base import EmbeddingClient, LLMClient
from cfarag.providers.litellm.models import ChatModels, EmbeddingModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based LLM client for text generation.

    Supports any model available through LiteLLM (OpenAI, Anthropic, Gemini,
    Bedrock, etc.).

    Example:
        from cfarag.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GPT_4O)
        response = client.complete([{"role": "user", "content": "Hello"}], json_mode=True)
    """

    def __init__(
        self,
        model: str = ChatModels.GPT_4O,
        num_retries: int = 0,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "openai/gpt-4o", "gemini/gemini-1.5-pro"
            num_retries: Retries LiteLLM performs on rate limit errors. Default 0,
                the batch orchestrator paces attempts instead.
            api_key: Explicit API key. If None, LiteLLM reads the provider's
                environment variable.
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key

    def _completion_kwargs(
        self,
        messages: list[dict],
        temperature: float | None,
        max_tokens: int | None,
        json_mode: bool,
    ) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if max_tokens is not None:
            completion_kwargs["max_tokens"] = max_tokens
        if json_mode:
            completion_kwargs["response_format"] = {"type": "json_object"}
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key
        return completion_kwargs

    def _extract_content(self, response: Any) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {self.model}")
        return str(content)

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(
            **self._completion_kwargs(messages, temperature, max_tokens, json_mode)
        )
        return self._extract_content(response)

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(
            **self._completion_kwargs(messages, temperature, max_tokens, json_mode)
        )
        return self._extract_content(response)

    def check_credentials(self) -> None:
        """Fail fast when the model's API key is not configured."""
        if self.api_key:
            return
        env = litellm.validate_environment(model=self.model)
        if not env.get("keys_in_environment", True):
            missing = ", ".join(env.get("missing_keys", [])) or "API key"
            raise ValueError(f"Missing credentials for model {self.model}: {missing}")


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from cfarag.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
        embeddings = client.embed(["Duration measures...", "Convexity..."])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.TEXT_3_SMALL,
        num_retries: int = 3,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
            num_retries: Number of retries on rate limit errors. LiteLLM handles
                        exponential backoff automatically. Default: 3.
        """
        self.model = model
        self.num_retries = num_retries

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        response = litellm.embedding(
            model=self.model,
            input=texts,
            num_retries=self.num_retries,
        )
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]
