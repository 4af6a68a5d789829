# src/cfarag/settings.py
"""Behavioral settings for cfarag.

Settings are passed programmatically. The library does not read environment
variables; ``cfarag.config`` and the CLI do that at the application layer
and pass values explicitly.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

# Rate limit profile definitions
RATE_LIMIT_PROFILES: dict[str, dict[str, Any]] = {
    "conservative": {
        "inter_call_delay": 5.0,
        "num_retries": 3,
    },
    "fast": {
        "inter_call_delay": 0.5,
    },
}


class Settings(BaseModel):
    """Behavioral settings for question generation.

    Example:
        settings = Settings(retrieval_strategy="vector", top_k=3)

        # Or use a rate limit profile for free API tiers
        settings = Settings.with_profile("conservative")
    """

    # Chunking
    max_chunk_size: int = Field(default=3000, gt=0)
    min_chunk_size: int = Field(default=500, ge=0)
    min_paragraph_chars: int = Field(default=50, ge=0)

    # Retrieval
    retrieval_strategy: Literal["vector", "local"] = "local"
    top_k: int = Field(default=5, ge=1)
    max_context_chars: int = Field(default=6000, gt=0)
    random_seed: int | None = None

    # Generation
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)
    generation_timeout: float | None = 60.0

    # Batching
    inter_call_delay: float = Field(default=2.0, ge=0.0)
    max_batch_size: int = Field(default=50, ge=1)

    # Retry configuration (LiteLLM handles exponential backoff for RateLimitError)
    num_retries: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_chunk_sizes(self) -> Settings:
        if self.min_chunk_size > self.max_chunk_size:
            raise ValueError("min_chunk_size must not exceed max_chunk_size")
        return self

    @classmethod
    def with_profile(
        cls,
        profile: Literal["conservative", "fast"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings with a rate limit profile.

        - "conservative": For free tiers or APIs with strict rate limits
        - "fast": For paid tiers; shortest pause between attempts

        Args:
            profile: The rate limit profile to use.
            **overrides: Additional settings to override profile defaults.

        Example:
            settings = Settings.with_profile("conservative", top_k=3)
        """
        if profile not in RATE_LIMIT_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(RATE_LIMIT_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = RATE_LIMIT_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)
