# src/cfarag/generation.py
"""Completion call for a single question attempt."""

from __future__ import annotations

import asyncio

import structlog

from cfarag.exceptions import GenerationError
from cfarag.prompts import SYSTEM_PROMPT
from cfarag.providers.base import LLMClient

logger = structlog.get_logger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT = 60.0


class GenerationClient:
    """Sends one prompt to the LLM and returns the raw reply.

    Every failure surfaces as ``GenerationError``. There are no retries here;
    pacing between attempts belongs to the batch orchestrator.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float | None = DEFAULT_TIMEOUT,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        """Initialize the generation client.

        Args:
            llm_client: LLM provider
            temperature: Sampling temperature
            max_tokens: Cap on generated tokens
            timeout: Seconds to wait for a reply (None waits forever)
            system_prompt: System message sent with every prompt
        """
        self._llm_client = llm_client
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.system_prompt = system_prompt

    async def generate(self, prompt: str) -> str:
        """Generate a raw JSON reply for a prompt.

        Raises:
            GenerationError: On missing credentials, provider failure,
                timeout, or an empty reply.
        """
        try:
            self._llm_client.check_credentials()
        except ValueError as e:
            raise GenerationError(str(e)) from e

        messages = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": prompt},
        ]

        try:
            raw = await asyncio.wait_for(
                self._llm_client.acomplete(
                    messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    json_mode=True,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(f"Completion timed out after {self.timeout}s") from e
        except Exception as e:
            raise GenerationError(f"Completion failed: {e}") from e

        if not raw or not raw.strip():
            raise GenerationError("Completion returned an empty response")

        logger.debug("completion_received", chars=len(raw))
        return raw
