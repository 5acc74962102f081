"""
stormimpact/loader.py
---------------------
Load storm event records from a NOAA storm data CSV.

Only the columns the pipeline needs are read. Compression (.bz2, .gz,
.zip) is inferred from the file extension.
"""

import logging
from pathlib import Path

import pandas as pd

from .records import RawRecord

logger = logging.getLogger(__name__)

# Source column -> RawRecord field
SOURCE_COLUMNS = {
    "EVTYPE": "event_type",
    "STATE": "state",
    "PROPDMG": "prop_dmg",
    "PROPDMGEXP": "prop_dmg_exp",
    "CROPDMG": "crop_dmg",
    "CROPDMGEXP": "crop_dmg_exp",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
    "BGN_DATE": "begin_date",
}

NUMERIC_FIELDS = ["prop_dmg", "crop_dmg", "fatalities", "injuries"]
COUNT_FIELDS = ["fatalities", "injuries"]
TEXT_FIELDS = ["event_type", "state", "prop_dmg_exp", "crop_dmg_exp", "begin_date"]


def clean_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename source columns and coerce types.

    Missing or non-numeric magnitudes and counts become 0; missing text
    fields become "". Negative values are clipped to 0.

    Raises:
        ValueError: If required source columns are missing
    """
    missing = [c for c in SOURCE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Input is missing required columns: {missing}")

    df = df[list(SOURCE_COLUMNS)].rename(columns=SOURCE_COLUMNS)

    for col in NUMERIC_FIELDS:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).clip(lower=0)
    for col in COUNT_FIELDS:
        df[col] = df[col].astype(int)
    for col in TEXT_FIELDS:
        df[col] = df[col].fillna("").astype(str)

    return df


def frame_to_records(df: pd.DataFrame) -> list[RawRecord]:
    """Convert a DataFrame with NOAA source columns to RawRecords."""
    df = clean_frame(df)
    return [RawRecord(**row) for row in df.to_dict("records")]


def load_records(path: Path | str, nrows: int | None = None) -> list[RawRecord]:
    """
    Read a storm data CSV into RawRecords.

    Args:
        path: CSV path (optionally compressed)
        nrows: Read only the first N rows

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Storm data not found: {path}")

    logger.info(f"Loading storm events from {path}")

    df = pd.read_csv(
        path,
        usecols=lambda c: c in SOURCE_COLUMNS,
        dtype={"PROPDMGEXP": str, "CROPDMGEXP": str, "BGN_DATE": str, "STATE": str, "EVTYPE": str},
        nrows=nrows,
        low_memory=False,
    )
    records = frame_to_records(df)

    logger.info(f"Loaded {len(records):,} records")
    return records
