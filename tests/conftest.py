"""
tests/conftest.py
-----------------
Shared fixtures for StormImpact tests.
"""

from datetime import date

import pytest

from stormimpact.config import PipelineConfig
from stormimpact.records import ClassifiedRecord, RawRecord


@pytest.fixture
def make_classified():
    """Factory for ClassifiedRecord with sensible defaults."""
    def _make(state="IL", year=2000, category="Flood", fatalities=0, injuries=0,
              property_damage=0.0, crop_damage=0.0, event_type="FLOOD"):
        return ClassifiedRecord(
            event_type=event_type,
            state=state,
            fatalities=fatalities,
            injuries=injuries,
            property_damage=property_damage,
            crop_damage=crop_damage,
            date=date(year, 6, 1),
            category=category,
        )
    return _make


@pytest.fixture
def scenario_records():
    """Three-record scenario: cold in IL, flash flood in TX, early tornado in IL."""
    return [
        RawRecord(event_type="EXTREME COLD", state="IL", fatalities=10, begin_date="1/15/2000 0:00:00"),
        RawRecord(event_type="FLASH FLOOD", state="TX", injuries=20, begin_date="6/1/2001 0:00:00"),
        RawRecord(event_type="TORNADO", state="IL", fatalities=5, begin_date="4/18/1999 0:00:00"),
    ]


@pytest.fixture
def inline_config():
    """Pipeline config without worker threads."""
    return PipelineConfig(workers=1)
