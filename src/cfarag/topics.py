# src/cfarag/topics.py
"""CFA Level 1 topic areas and difficulty levels."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from cfarag.exceptions import InvalidTopic

Difficulty = Literal["beginner", "intermediate", "advanced"]
DIFFICULTIES: tuple[Difficulty, ...] = ("beginner", "intermediate", "advanced")


class TopicArea(str, Enum):
    """The ten CFA Level 1 curriculum topic areas.

    The value is the display name, which is also the default name of the
    topic's material folder.
    """

    ETHICS = "Ethical and Professional Standards"
    QUANTITATIVE_METHODS = "Quantitative Methods"
    ECONOMICS = "Economics"
    FINANCIAL_STATEMENT_ANALYSIS = "Financial Statement Analysis"
    CORPORATE_ISSUERS = "Corporate Issuers"
    EQUITY_INVESTMENTS = "Equity Investments"
    FIXED_INCOME = "Fixed Income"
    DERIVATIVES = "Derivatives"
    ALTERNATIVE_INVESTMENTS = "Alternative Investments"
    PORTFOLIO_MANAGEMENT = "Portfolio Management"

    @property
    def slug(self) -> str:
        """URL-style identifier, e.g. ``fixed-income``."""
        return _SLUGS[self]

    def __str__(self) -> str:
        return self.value


_SLUGS: dict[TopicArea, str] = {
    TopicArea.ETHICS: "ethical-professional-standards",
    TopicArea.QUANTITATIVE_METHODS: "quantitative-methods",
    TopicArea.ECONOMICS: "economics",
    TopicArea.FINANCIAL_STATEMENT_ANALYSIS: "financial-statement-analysis",
    TopicArea.CORPORATE_ISSUERS: "corporate-issuers",
    TopicArea.EQUITY_INVESTMENTS: "equity-investments",
    TopicArea.FIXED_INCOME: "fixed-income",
    TopicArea.DERIVATIVES: "derivatives",
    TopicArea.ALTERNATIVE_INVESTMENTS: "alternative-investments",
    TopicArea.PORTFOLIO_MANAGEMENT: "portfolio-management",
}


def parse_topic(value: TopicArea | str) -> TopicArea:
    """Resolve a display name or slug to a TopicArea.

    Matching is case-insensitive and ignores surrounding whitespace.

    Raises:
        InvalidTopic: If the value names no known topic.
    """
    if isinstance(value, TopicArea):
        return value
    if not isinstance(value, str):
        raise InvalidTopic(value)

    normalized = value.strip().lower()
    for topic in TopicArea:
        if normalized in (topic.value.lower(), topic.slug):
            return topic
    raise InvalidTopic(value)


def parse_difficulty(value: str) -> Difficulty:
    """Validate a difficulty level string.

    Raises:
        ValueError: If the value is not a known difficulty.
    """
    if value not in DIFFICULTIES:
        raise ValueError(f"Invalid difficulty {value!r}. Must be one of: {', '.join(DIFFICULTIES)}")
    return value  # type: ignore[return-value]
