"""
stormimpact/records.py
----------------------
Record types flowing through the pipeline.

Each stage derives a new immutable record from the previous one:

    RawRecord -> NormalizedRecord -> ClassifiedRecord
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RawRecord:
    """
    One observed weather event as read from the source table.

    Attributes:
        event_type: Free-text event label (EVTYPE)
        state: Two-letter region code (STATE)
        prop_dmg: Property damage magnitude (PROPDMG)
        prop_dmg_exp: Property damage scale suffix (PROPDMGEXP)
        crop_dmg: Crop damage magnitude (CROPDMG)
        crop_dmg_exp: Crop damage scale suffix (CROPDMGEXP)
        fatalities: Direct fatalities
        injuries: Direct injuries
        begin_date: Begin date text, e.g. "4/18/1950 0:00:00"
    """
    event_type: str
    state: str
    prop_dmg: float = 0.0
    prop_dmg_exp: str = ""
    crop_dmg: float = 0.0
    crop_dmg_exp: str = ""
    fatalities: int = 0
    injuries: int = 0
    begin_date: str = ""


@dataclass(frozen=True)
class NormalizedRecord:
    """Raw record with cleaned labels, resolved damage in USD and a parsed date."""
    event_type: str
    state: str
    fatalities: int
    injuries: int
    property_damage: float
    crop_damage: float
    date: date

    @property
    def year(self) -> int:
        return self.date.year


@dataclass(frozen=True)
class ClassifiedRecord:
    """Normalized record with exactly one taxonomy category."""
    event_type: str
    state: str
    fatalities: int
    injuries: int
    property_damage: float
    crop_damage: float
    date: date
    category: str

    @property
    def year(self) -> int:
        return self.date.year

    @classmethod
    def from_normalized(cls, record: NormalizedRecord, category: str) -> "ClassifiedRecord":
        return cls(
            event_type=record.event_type,
            state=record.state,
            fatalities=record.fatalities,
            injuries=record.injuries,
            property_damage=record.property_damage,
            crop_damage=record.crop_damage,
            date=record.date,
            category=category,
        )
