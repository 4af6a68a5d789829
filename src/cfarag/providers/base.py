# src/cfarag/providers/base.py
"""Abstract base classes for completion and embedding providers."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Chat completion provider used to write questions.

    Only ``complete`` is required. ``acomplete`` and ``check_credentials``
    have working defaults so a test double can stay a few lines long.

    Example:
        class CannedClient(LLMClient):
            def complete(self, messages, temperature=None, max_tokens=None, json_mode=False):
                return '{"question_text": "..."}'
    """

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Return the assistant reply for a chat transcript.

        Args:
            messages: Chat messages, each a dict with 'role' and 'content'.
            temperature: Sampling temperature, or None for the provider default.
            max_tokens: Cap on reply length, or None for the provider default.
            json_mode: Request a reply that is a single JSON object.
        """
        ...

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Async form of ``complete``; blocks the loop unless overridden."""
        return self.complete(messages, temperature, max_tokens, json_mode)

    def check_credentials(self) -> None:
        """Raise ValueError if the provider is missing an API key.

        The base implementation needs none.
        """


class EmbeddingClient(ABC):
    """Embedding provider for material chunks and retrieval queries."""

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts.

        Returns:
            One vector per input, in input order.
        """
        ...
