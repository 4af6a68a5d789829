# tests/test_generation.py
"""Tests for GenerationClient."""

import asyncio

import pytest
from conftest import FakeLLMClient

from cfarag.exceptions import GenerationError
from cfarag.generation import GenerationClient
from cfarag.prompts import SYSTEM_PROMPT


class TestGenerationClient:
    @pytest.mark.asyncio
    async def test_sends_prompt_with_json_mode(self):
        llm = FakeLLMClient(['{"ok": true}'])
        raw = await GenerationClient(llm).generate("Write a question")

        assert raw == '{"ok": true}'
        call = llm.calls[0]
        assert call["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "Write a question"},
        ]
        assert call["temperature"] == 0.7
        assert call["max_tokens"] == 2000
        assert call["json_mode"] is True

    @pytest.mark.asyncio
    async def test_custom_parameters(self):
        llm = FakeLLMClient(["{}"])
        await GenerationClient(llm, temperature=0.2, max_tokens=500).generate("p")
        assert llm.calls[0]["temperature"] == 0.2
        assert llm.calls[0]["max_tokens"] == 500

    @pytest.mark.asyncio
    async def test_provider_error(self):
        llm = FakeLLMClient([RuntimeError("rate limited")])
        with pytest.raises(GenerationError, match="rate limited"):
            await GenerationClient(llm).generate("p")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   \n"])
    async def test_empty_reply(self, reply):
        with pytest.raises(GenerationError, match="empty"):
            await GenerationClient(FakeLLMClient([reply])).generate("p")

    @pytest.mark.asyncio
    async def test_timeout(self):
        class SlowClient(FakeLLMClient):
            async def acomplete(self, messages, temperature=None, max_tokens=None, json_mode=False):
                await asyncio.sleep(5)
                return "{}"

        with pytest.raises(GenerationError, match="timed out"):
            await GenerationClient(SlowClient(), timeout=0.01).generate("p")

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        class NoKeyClient(FakeLLMClient):
            def check_credentials(self) -> None:
                raise ValueError("Missing credentials for model x: OPENAI_API_KEY")

        llm = NoKeyClient()
        with pytest.raises(GenerationError, match="OPENAI_API_KEY"):
            await GenerationClient(llm).generate("p")
        assert llm.calls == []

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        class HangingClient(FakeLLMClient):
            async def acomplete(self, messages, temperature=None, max_tokens=None, json_mode=False):
                await asyncio.sleep(10)
                return "{}"

        task = asyncio.create_task(GenerationClient(HangingClient()).generate("p"))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
