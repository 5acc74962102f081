"""
tests/test_report.py
--------------------
Unit tests for the top-K report view and value formatting.

Run with: python -m pytest tests/test_report.py -v
"""

import pandas as pd
import pytest

from analytics.aggregate import aggregate_records
from analytics.report import REPORT_COLUMNS, build_report, format_report, format_value, top_states

UNITS = {"fatalities": 1, "injuries": 1, "property_damage": 1e9}


@pytest.fixture
def tables(make_classified):
    records = [
        make_classified(state="TX", category="Flood", fatalities=40, property_damage=9e9),
        make_classified(state="TX", category="Convection", fatalities=25, property_damage=1e9),
        make_classified(state="IL", category="Extreme-Temperature", fatalities=50),
        make_classified(state="MO", category="Convection", fatalities=30, injuries=4),
        make_classified(state="KS", category="Convection", fatalities=10, injuries=8),
        make_classified(state="KS", category="Winter", fatalities=1),
    ]
    return aggregate_records(records, UNITS)


class TestFormatValue:
    """Tests for display formatting."""

    def test_count_thousands_separator(self):
        assert format_value(1234, "fatalities") == "1,234"

    def test_fractional_count(self):
        assert format_value(0.5, "injuries") == "0.50"

    def test_property_damage_billions(self):
        assert format_value(12.5, "property_damage", {"property_damage": 1e9}) == "$12.50B"

    def test_property_damage_millions(self):
        assert format_value(3, "property_damage", {"property_damage": 1e6}) == "$3.00M"

    def test_property_damage_default_units(self):
        assert format_value(0.25, "property_damage") == "$0.25B"


class TestTopStates:
    """Tests for top-K state selection."""

    def test_top_three(self, tables):
        assert top_states(tables["state_totals"], "fatalities", 3) == ["TX", "IL", "MO"]

    def test_k_larger_than_states(self, tables):
        assert len(top_states(tables["state_totals"], "fatalities", 10)) == 4

    def test_unknown_outcome(self, tables):
        assert top_states(tables["state_totals"], "crop_damage", 3) == []


class TestBuildReport:
    """Tests for report row construction."""

    def test_columns(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=3, units=UNITS)
        assert list(report.columns) == REPORT_COLUMNS

    def test_only_top_k_states(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=2, units=UNITS)
        fatalities = report[report["outcome"] == "fatalities"]

        assert set(fatalities["state"]) == {"TX", "IL"}
        assert len(fatalities) == 3

    def test_sorted_by_value_within_outcome(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=3, units=UNITS)
        for _, block in report.groupby("outcome"):
            values = block["value"].tolist()
            assert values == sorted(values, reverse=True)

    def test_fatality_rows(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=3, units=UNITS)
        fatalities = report[report["outcome"] == "fatalities"]

        assert list(zip(fatalities["state"], fatalities["category"])) == [
            ("IL", "Extreme-Temperature"),
            ("TX", "Flood"),
            ("MO", "Convection"),
            ("TX", "Convection"),
        ]
        assert fatalities["formatted"].tolist() == ["50", "40", "30", "25"]

    def test_outcome_order(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=1, units=UNITS)
        assert report["outcome"].drop_duplicates().tolist() == ["fatalities", "injuries", "property_damage"]

    def test_property_damage_formatted(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=1, units=UNITS)
        damage = report[report["outcome"] == "property_damage"]

        assert damage["state"].unique().tolist() == ["TX"]
        assert damage["formatted"].tolist() == ["$9.00B", "$1.00B"]

    def test_empty_tables(self):
        empty_totals = pd.DataFrame(columns=["state", "outcome", "value", "rank"])
        empty_categories = pd.DataFrame(columns=["state", "category", "outcome", "value", "scaled"])
        report = build_report(empty_totals, empty_categories)

        assert report.empty
        assert list(report.columns) == REPORT_COLUMNS


class TestFormatReport:
    """Tests for plain-text rendering."""

    def test_sections(self, tables):
        report = build_report(tables["state_totals"], tables["state_category"], top_k=1, units=UNITS)
        text = format_report(report)

        assert "Fatalities" in text
        assert "Injuries" in text
        assert "Property Damage" in text
        assert "$9.00B" in text
