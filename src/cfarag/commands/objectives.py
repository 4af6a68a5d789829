# src/cfarag/commands/objectives.py
"""Objectives command - list the learning objectives of a topic."""

from __future__ import annotations

from cfarag.commands.base import ObjectivesResult
from cfarag.exceptions import InvalidTopic
from cfarag.objectives import default_catalog
from cfarag.topics import parse_topic


def objectives(topic: str, reading: str | None = None) -> ObjectivesResult:
    """List catalog objectives for a topic, optionally for one reading.

    The reading is matched case-insensitively as a substring of its name.
    """
    try:
        topic_area = parse_topic(topic)
    except InvalidTopic as e:
        return ObjectivesResult(success=False, topic=str(topic), error=str(e))

    found = default_catalog().for_topic(topic_area)
    if reading:
        needle = reading.strip().lower()
        found = [o for o in found if needle in o.reading.lower()]
        if not found:
            return ObjectivesResult(
                success=False,
                topic=topic_area.value,
                error=f"No reading matching {reading!r} in {topic_area.value}",
            )

    return ObjectivesResult(success=True, topic=topic_area.value, objectives=found)
