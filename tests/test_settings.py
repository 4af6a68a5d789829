# tests/test_settings.py
"""Tests for Settings."""

import pytest
from pydantic import ValidationError

from cfarag.settings import RATE_LIMIT_PROFILES, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.max_chunk_size == 3000
        assert settings.min_chunk_size == 500
        assert settings.min_paragraph_chars == 50
        assert settings.retrieval_strategy == "local"
        assert settings.top_k == 5
        assert settings.temperature == 0.7
        assert settings.max_tokens == 2000
        assert settings.generation_timeout == 60.0
        assert settings.inter_call_delay == 2.0
        assert settings.max_batch_size == 50
        assert settings.num_retries == 0

    def test_custom_values(self):
        settings = Settings(retrieval_strategy="vector", top_k=3, inter_call_delay=0)
        assert settings.retrieval_strategy == "vector"
        assert settings.top_k == 3
        assert settings.inter_call_delay == 0

    def test_rejects_unknown_strategy(self):
        with pytest.raises(ValidationError):
            Settings(retrieval_strategy="keyword")

    def test_rejects_negative_delay(self):
        with pytest.raises(ValidationError):
            Settings(inter_call_delay=-1)

    def test_rejects_inverted_chunk_sizes(self):
        with pytest.raises(ValidationError, match="min_chunk_size"):
            Settings(max_chunk_size=400, min_chunk_size=500)

    def test_strings_are_coerced(self):
        settings = Settings(top_k="7", temperature="0.2")
        assert settings.top_k == 7
        assert settings.temperature == 0.2


class TestRateLimitProfiles:
    def test_conservative(self):
        settings = Settings.with_profile("conservative")
        assert settings.inter_call_delay == RATE_LIMIT_PROFILES["conservative"]["inter_call_delay"]
        assert settings.num_retries == 3

    def test_fast(self):
        assert Settings.with_profile("fast").inter_call_delay == 0.5

    def test_overrides_win(self):
        settings = Settings.with_profile("conservative", inter_call_delay=1.0, top_k=2)
        assert settings.inter_call_delay == 1.0
        assert settings.top_k == 2

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            Settings.with_profile("reckless")  # type: ignore[arg-type]
