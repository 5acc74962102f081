"""
tests/test_classifier.py
------------------------
Unit tests for the storm event taxonomy and classifier:
- Category rules on common EVTYPE spelling variants
- Priority ordering for compound labels
- Totality (every label gets exactly one category)
- Custom taxonomy validation

Run with: python -m pytest tests/test_classifier.py -v
"""

from dataclasses import fields
from datetime import date

import pytest

from stormimpact.records import NormalizedRecord
from taxonomy.categories import (
    CATEGORY_CODES,
    CONVECTION,
    EXTREME_TEMPERATURE,
    FLOOD,
    OTHER,
    STORM_CATEGORIES,
    WINTER,
    EventCategory,
    get_category,
    get_primary_categories,
)
from taxonomy.classifier import (
    EventClassifier,
    category_distribution,
    classify_event_type,
    classify_records,
    unmatched_event_types,
)


class TestTaxonomy:
    """Tests for the category list itself."""

    def test_priority_order(self):
        assert CATEGORY_CODES == [CONVECTION, EXTREME_TEMPERATURE, FLOOD, WINTER, OTHER]

    def test_priorities_ascending(self):
        assert [c.priority for c in STORM_CATEGORIES] == [1, 2, 3, 4, 5]

    def test_only_last_is_fallback(self):
        assert STORM_CATEGORIES[-1].is_fallback
        assert not any(c.is_fallback for c in STORM_CATEGORIES[:-1])

    def test_get_category_case_insensitive(self):
        assert get_category("flood").code == FLOOD
        assert get_category("nope") is None

    def test_category_fields(self):
        assert [f.name for f in fields(EventCategory)] == [
            "code", "name", "description", "patterns", "priority",
        ]

    def test_primary_excludes_fallback(self):
        assert OTHER not in [c.code for c in get_primary_categories()]


class TestCategoryRules:
    """Tests for individual category rules on real label variants."""

    @pytest.mark.parametrize("label", [
        "TORNADO", "TORNDAO", "TORNADOES, TSTM WIND, HAIL", "FUNNEL CLOUD",
        "WATERSPOUT/TORNADO", "LIGHTNING", "LIGNTNING", "LIGHTING",
        "TSTM WIND", "THUNDERSTORM WINDS", "HIGH WIND", "HAIL", "SMALL HAIL",
        "tstm wind",
    ])
    def test_convection(self, label):
        assert classify_event_type(label) == CONVECTION

    @pytest.mark.parametrize("label", [
        "EXTREME COLD", "EXCESSIVE HEAT", "HEAT WAVE", "RECORD COLD", "heat",
    ])
    def test_extreme_temperature(self, label):
        assert classify_event_type(label) == EXTREME_TEMPERATURE

    @pytest.mark.parametrize("label", [
        "FLASH FLOOD", "FLOODING", "FLOOD", "URBAN/SML STREAM FLD", "HEAVY RAIN",
        "RECORD PRECIPITATION", "HEAVY SHOWER", "COASTAL FLOODING",
        "LANDSLIDE/FLOODING", "COASTAL FLOODING/EROSION",
    ])
    def test_flood(self, label):
        assert classify_event_type(label) == FLOOD

    @pytest.mark.parametrize("label", [
        "HEAVY SNOW", "ICE STORM", "ICY ROADS", "FROST/FREEZE", "WINTER WEATHER",
        "WINTER STORM", "LAKE-EFFECT SNOW",
    ])
    def test_winter(self, label):
        assert classify_event_type(label) == WINTER

    @pytest.mark.parametrize("label", [
        "DROUGHT", "DENSE FOG", "RIP CURRENT", "WILDFIRE", "HIGH SURF", "", None,
    ])
    def test_other(self, label):
        assert classify_event_type(label) == OTHER


class TestPriority:
    """Tests for first-match-wins on compound labels."""

    def test_thunderstorm_and_flood(self):
        """Convection outranks Flood."""
        classifier = EventClassifier()
        label = "THUNDERSTORM WIND/FLASH FLOOD"

        assert classifier.classify(label) == CONVECTION
        assert classifier.matching_categories(label) == [CONVECTION, FLOOD]

    def test_wind_and_snow(self):
        """Convection outranks Winter."""
        assert classify_event_type("HEAVY SNOW/HIGH WINDS") == CONVECTION

    def test_cold_and_snow(self):
        """Extreme-Temperature outranks Winter."""
        assert classify_event_type("COLD AND SNOW") == EXTREME_TEMPERATURE

    def test_rain_and_snow(self):
        """Flood outranks Winter."""
        assert classify_event_type("HEAVY RAIN/SNOW") == FLOOD

    def test_wind_chill_is_convection(self):
        """Any wind token wins over cold."""
        assert classify_event_type("EXTREME COLD/WIND CHILL") == CONVECTION

    @pytest.mark.parametrize("label", ["LANDSLIDE/FLOODING", "LOW/STRONG", "TORRENT/RADIO"])
    def test_tokens_stop_at_slash(self, label):
        """Lightning and tornado rules do not span slash-joined names."""
        assert CONVECTION not in EventClassifier().matching_categories(label)

    def test_no_matches(self):
        assert EventClassifier().matching_categories("DROUGHT") == []
        assert EventClassifier().matching_categories(None) == []


class TestTotality:
    """Every label receives exactly one known category."""

    LABELS = [
        "TSTM WIND", "SUMMARY OF MAY 22", "?", "HYPOTHERMIA/EXPOSURE", "VOLCANIC ASH",
        "MARINE TSTM WIND", "GLAZE", "AVALANCHE", "DUST STORM", "STORM SURGE/TIDE",
        "12345", "   ", "Heavy Snow Shower", "Flash Flood/Landslide",
    ]

    @pytest.mark.parametrize("label", LABELS)
    def test_single_known_category(self, label):
        category = classify_event_type(label)
        assert isinstance(category, str)
        assert category in CATEGORY_CODES


class TestCustomTaxonomy:
    """Tests for classifier construction with a custom category list."""

    def test_requires_fallback_last(self):
        with pytest.raises(ValueError):
            EventClassifier([EventCategory(code="Flood", name="Flood", description="", patterns=("FLOOD",))])

    def test_requires_categories(self):
        with pytest.raises(ValueError):
            EventClassifier([])

    def test_custom_rules(self):
        classifier = EventClassifier([
            EventCategory(code="Dry", name="Dry", description="", patterns=("DROUGHT|DUST",), priority=1),
            EventCategory(code="Rest", name="Rest", description="", priority=2),
        ])
        assert classifier.classify("drought") == "Dry"
        assert classifier.classify("TORNADO") == "Rest"
        assert classifier.fallback == "Rest"


class TestClassifyRecords:
    """Tests for batch record classification."""

    def _normalized(self, event_type):
        return NormalizedRecord(
            event_type=event_type, state="KS", fatalities=1, injuries=2,
            property_damage=10.0, crop_damage=5.0, date=date(2005, 5, 5),
        )

    def test_preserves_fields_and_order(self):
        records = classify_records([self._normalized("TORNADO"), self._normalized("DROUGHT")])

        assert [r.category for r in records] == [CONVECTION, OTHER]
        assert records[0].state == "KS"
        assert records[0].property_damage == 10.0
        assert records[0].year == 2005

    def test_distribution_and_unmatched(self):
        records = classify_records([
            self._normalized("TORNADO"),
            self._normalized("DROUGHT"),
            self._normalized("DROUGHT"),
            self._normalized("DENSE FOG"),
        ])

        assert category_distribution(records) == {CONVECTION: 1, OTHER: 3}
        assert unmatched_event_types(records) == [("DROUGHT", 2), ("DENSE FOG", 1)]
