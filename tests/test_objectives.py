# tests/test_objectives.py
"""Tests for the learning objective catalog."""

import pytest

from cfarag.exceptions import InvalidTopic, UnknownLearningObjective
from cfarag.objectives import LearningObjective, ObjectiveCatalog, default_catalog
from cfarag.topics import TopicArea

CUSTOM_CATALOG = """\
"Fixed Income":
  "Bond Basics":
    - id: "FI-B-1"
      text: "describe a bond"
    - id: "FI-B-2"
      text: "  price a bond  "
  "Yield Measures":
    - id: "FI-Y-1"
      text: "calculate yield to maturity"
"economics":
  "Markets":
    - id: "EC-M-1"
      text: "describe market structures"
"""


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "objectives.yaml"
    path.write_text(CUSTOM_CATALOG)
    return ObjectiveCatalog.load(path)


class TestBundledCatalog:
    def test_covers_every_topic(self):
        catalog = default_catalog()
        for topic in TopicArea:
            assert catalog.for_topic(topic), topic

    def test_size(self):
        assert len(default_catalog()) == 365

    def test_lookup(self):
        objective = default_catalog().get("FI-FIIF-1")
        assert objective == LearningObjective(
            id="FI-FIIF-1",
            text="describe the features of a fixed-income security",
            reading="Fixed-Income Instrument Features",
            topic=TopicArea.FIXED_INCOME,
        )

    def test_cached(self):
        assert default_catalog() is default_catalog()


class TestObjectiveCatalog:
    def test_load_from_path(self, catalog):
        assert len(catalog) == 4
        assert [o.id for o in catalog.for_topic("fixed-income")] == ["FI-B-1", "FI-B-2", "FI-Y-1"]
        assert catalog.get("EC-M-1").topic is TopicArea.ECONOMICS

    def test_text_is_stripped(self, catalog):
        assert catalog.get("FI-B-2").text == "price a bond"

    def test_get_ignores_case_and_whitespace(self, catalog):
        assert catalog.get("  fi-y-1 ").id == "FI-Y-1"
        assert "fi-b-1" in catalog
        assert "FI-X-9" not in catalog
        assert catalog.get("FI-X-9") is None

    def test_readings(self, catalog):
        assert catalog.readings(TopicArea.FIXED_INCOME) == ["Bond Basics", "Yield Measures"]
        assert catalog.readings(TopicArea.DERIVATIVES) == []

    def test_resolve(self, catalog):
        assert catalog.resolve("FI-B-1", "Fixed Income").text == "describe a bond"

    def test_resolve_unknown(self, catalog):
        with pytest.raises(UnknownLearningObjective) as exc_info:
            catalog.resolve("FI-X-9", TopicArea.FIXED_INCOME)
        assert exc_info.value.objective_id == "FI-X-9"
        assert "Fixed Income" in str(exc_info.value)

    def test_resolve_other_topic(self, catalog):
        with pytest.raises(UnknownLearningObjective):
            catalog.resolve("EC-M-1", TopicArea.FIXED_INCOME)

    def test_unknown_objective_is_value_error(self, catalog):
        with pytest.raises(ValueError):
            catalog.resolve("EC-M-1", TopicArea.FIXED_INCOME)

    def test_duplicate_id(self):
        objective = LearningObjective("X-1", "a", "R", TopicArea.ECONOMICS)
        with pytest.raises(ValueError, match="Duplicate"):
            ObjectiveCatalog([objective, LearningObjective("x-1", "b", "R", TopicArea.ECONOMICS)])

    def test_entry_without_text(self, tmp_path):
        path = tmp_path / "objectives.yaml"
        path.write_text('"Economics":\n  "Markets":\n    - id: "EC-1"\n')
        with pytest.raises(ValueError, match="needs an id and text"):
            ObjectiveCatalog.load(path)

    def test_unknown_topic_key(self, tmp_path):
        path = tmp_path / "objectives.yaml"
        path.write_text('"Astrology":\n  "Stars":\n    - id: "A-1"\n      text: "read stars"\n')
        with pytest.raises(InvalidTopic):
            ObjectiveCatalog.load(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "objectives.yaml"
        path.write_text("")
        assert len(ObjectiveCatalog.load(path)) == 0
