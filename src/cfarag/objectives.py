# src/cfarag/objectives.py
"""Catalog of CFA Level 1 learning outcome statements.

The catalog ships as ``data/learning_objectives.yaml``, laid out as topic
area, then reading, then a list of ``{id, text}`` entries. A request may name
an objective by ID alone; its statement is looked up here.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from cfarag.exceptions import UnknownLearningObjective
from cfarag.topics import TopicArea, parse_topic

CATALOG_FILE = "learning_objectives.yaml"


@dataclass(frozen=True)
class LearningObjective:
    """One learning outcome statement.

    Attributes:
        id: Identifier such as ``FI-FIIF-1``
        text: The statement, e.g. "describe the features of a fixed-income security"
        reading: Name of the reading the objective belongs to
        topic: Topic area of the reading
    """

    id: str
    text: str
    reading: str
    topic: TopicArea


class ObjectiveCatalog:
    """Learning objectives indexed by ID and grouped by topic."""

    def __init__(self, objectives: list[LearningObjective]) -> None:
        self._by_id: dict[str, LearningObjective] = {}
        self._by_topic: dict[TopicArea, list[LearningObjective]] = {}
        for objective in objectives:
            key = objective.id.upper()
            if key in self._by_id:
                raise ValueError(f"Duplicate learning objective id: {objective.id}")
            self._by_id[key] = objective
            self._by_topic.setdefault(objective.topic, []).append(objective)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ObjectiveCatalog:
        """Load a catalog from YAML, defaulting to the bundled file.

        Raises:
            InvalidTopic: If a top-level key is not a topic area.
            ValueError: If an entry lacks an id or text, or an id repeats.
        """
        if path is None:
            bundled = resources.files("cfarag") / "data" / CATALOG_FILE
            raw = bundled.read_text(encoding="utf-8")
        else:
            raw = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(raw) or {}

        objectives = []
        for topic_name, readings in data.items():
            topic = parse_topic(topic_name)
            for reading, entries in (readings or {}).items():
                for entry in entries or []:
                    if not entry.get("id") or not entry.get("text"):
                        raise ValueError(f"Learning objective in {reading!r} needs an id and text")
                    objectives.append(
                        LearningObjective(
                            id=str(entry["id"]).strip(),
                            text=str(entry["text"]).strip(),
                            reading=reading,
                            topic=topic,
                        )
                    )
        return cls(objectives)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, objective_id: object) -> bool:
        return isinstance(objective_id, str) and objective_id.strip().upper() in self._by_id

    def get(self, objective_id: str) -> LearningObjective | None:
        """Look up an objective by ID, ignoring case and surrounding whitespace."""
        return self._by_id.get(objective_id.strip().upper())

    def for_topic(self, topic: TopicArea | str) -> list[LearningObjective]:
        """Objectives of one topic, in catalog order."""
        return list(self._by_topic.get(parse_topic(topic), []))

    def readings(self, topic: TopicArea | str) -> list[str]:
        """Reading names of one topic, in catalog order."""
        return list(dict.fromkeys(o.reading for o in self.for_topic(topic)))

    def resolve(self, objective_id: str, topic: TopicArea | str) -> LearningObjective:
        """Look up an objective that must belong to ``topic``.

        Raises:
            UnknownLearningObjective: If the ID is unknown or names another topic's objective.
        """
        topic = parse_topic(topic)
        objective = self.get(objective_id)
        if objective is None or objective.topic is not topic:
            raise UnknownLearningObjective(objective_id, topic.value)
        return objective


@lru_cache(maxsize=1)
def default_catalog() -> ObjectiveCatalog:
    """The bundled catalog, parsed once per process."""
    return ObjectiveCatalog.load()
