"""
analytics/aggregate.py
----------------------
Reshape filtered records to long form and compute grouped outcome totals.

Tables produced (pandas DataFrames):
- outcomes:        state, year, category, outcome, value   (3 rows per record)
- state_category:  state, category, outcome, value, scaled
- state_totals:    state, outcome, value, rank
- year_category:   year, category, outcome, value
- category_totals: category, outcome, value
"""

import logging

import numpy as np
import pandas as pd

from stormimpact.config import OUTCOMES

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "state", "year", "category", "event_type",
    "fatalities", "injuries", "property_damage", "crop_damage",
]
ID_COLUMNS = ["state", "year", "category"]


def records_to_frame(records) -> pd.DataFrame:
    """Build a wide DataFrame, one row per classified record."""
    rows = [
        {
            "state": r.state,
            "year": r.year,
            "category": r.category,
            "event_type": r.event_type,
            "fatalities": r.fatalities,
            "injuries": r.injuries,
            "property_damage": r.property_damage,
            "crop_damage": r.crop_damage,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def melt_outcomes(frame: pd.DataFrame, units: dict) -> pd.DataFrame:
    """
    Melt the three outcome columns into long form.

    Each input row becomes exactly three rows (one per outcome) carrying the
    same state/year/category; value is the raw field divided by units[outcome].
    """
    outcomes = frame.melt(
        id_vars=ID_COLUMNS,
        value_vars=list(OUTCOMES),
        var_name="outcome",
        value_name="value",
    )
    divisors = outcomes["outcome"].map(units).astype(float)
    outcomes["value"] = outcomes["value"].astype(float) / divisors
    return outcomes


def rms_scale(values: pd.Series) -> pd.Series:
    """
    Divide values by their root-mean-square (non-centered standard deviation).

    Values are not centered. A group of all zeros scales to zeros.
    """
    values = values.astype(float)
    if values.empty:
        return values
    rms = float(np.sqrt(np.mean(np.square(values))))
    if rms == 0:
        return values * 0.0
    return values / rms


def state_category_totals(outcomes: pd.DataFrame) -> pd.DataFrame:
    """Sum outcomes by (state, category, outcome) and add the per-outcome scaled value."""
    totals = outcomes.groupby(["state", "category", "outcome"], as_index=False)["value"].sum()
    totals["scaled"] = totals.groupby("outcome")["value"].transform(rms_scale)
    return totals.sort_values(
        ["outcome", "value", "state", "category"],
        ascending=[True, False, True, True],
    ).reset_index(drop=True)


def state_totals(outcomes: pd.DataFrame) -> pd.DataFrame:
    """
    Sum outcomes by (state, outcome) and rank states within each outcome.

    Rank 1 is the largest total. Ties are broken by ascending state code.
    """
    totals = outcomes.groupby(["state", "outcome"], as_index=False)["value"].sum()
    totals = totals.sort_values(
        ["outcome", "value", "state"],
        ascending=[True, False, True],
        kind="mergesort",
    ).reset_index(drop=True)
    totals["rank"] = totals.groupby("outcome").cumcount() + 1
    return totals


def year_category_totals(outcomes: pd.DataFrame) -> pd.DataFrame:
    """Sum outcomes by (year, category, outcome) for trend views."""
    totals = outcomes.groupby(["year", "category", "outcome"], as_index=False)["value"].sum()
    return totals.sort_values(["outcome", "year", "category"]).reset_index(drop=True)


def category_totals(outcomes: pd.DataFrame) -> pd.DataFrame:
    """National totals by (category, outcome)."""
    totals = outcomes.groupby(["category", "outcome"], as_index=False)["value"].sum()
    return totals.sort_values(
        ["outcome", "value"], ascending=[True, False]
    ).reset_index(drop=True)


def aggregate_records(records, units: dict) -> dict:
    """
    Run the full aggregation over filtered records.

    Returns:
        Dict of DataFrames: outcomes, state_category, state_totals,
        year_category, category_totals
    """
    frame = records_to_frame(records)
    outcomes = melt_outcomes(frame, units)
    logger.info(f"Melted {len(frame):,} records into {len(outcomes):,} outcome rows")

    tables = {
        "outcomes": outcomes,
        "state_category": state_category_totals(outcomes),
        "state_totals": state_totals(outcomes),
        "year_category": year_category_totals(outcomes),
        "category_totals": category_totals(outcomes),
    }

    logger.info(
        f"Aggregated {tables['state_totals']['state'].nunique()} states, "
        f"{len(tables['state_category']):,} state-category rows"
    )
    return tables
