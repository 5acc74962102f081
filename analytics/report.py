"""
analytics/report.py
-------------------
Shape aggregate tables into top-K report rows for rendering.

For each outcome the K highest-ranked states are selected, and their
per-category totals are listed in descending order. Rendering (tables,
charts) happens downstream.
"""

import logging

import pandas as pd

from stormimpact.config import OUTCOMES

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["outcome", "state", "value", "formatted", "category"]

OUTCOME_LABELS = {
    "fatalities": "Fatalities",
    "injuries": "Injuries",
    "property_damage": "Property Damage",
}

# Divisor -> suffix for USD amounts
_USD_SUFFIXES = {1e9: "B", 1e6: "M", 1e3: "K", 1: ""}


def format_value(value: float, outcome: str, units: dict | None = None) -> str:
    """
    Format an outcome value for display.

    Counts get thousands separators ("1,234"). Property damage is shown as
    USD with the unit suffix of its divisor ("$12.35B" for billions).
    """
    if outcome == "property_damage":
        divisor = float((units or {}).get(outcome, 1e9))
        suffix = _USD_SUFFIXES.get(divisor, "")
        return f"${value:,.2f}{suffix}"

    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def top_states(state_totals: pd.DataFrame, outcome: str, top_k: int = 3) -> list[str]:
    """States with rank <= top_k for one outcome, best first."""
    selected = state_totals[
        (state_totals["outcome"] == outcome) & (state_totals["rank"] <= top_k)
    ].sort_values("rank")
    return selected["state"].tolist()


def build_report(
    state_totals: pd.DataFrame,
    state_category: pd.DataFrame,
    top_k: int = 3,
    units: dict | None = None,
) -> pd.DataFrame:
    """
    Build report rows: top-K states per outcome, broken down by category.

    Args:
        state_totals: state, outcome, value, rank
        state_category: state, category, outcome, value, scaled
        top_k: Number of states per outcome
        units: Outcome divisors (for formatting)

    Returns:
        DataFrame with columns outcome, state, value, formatted, category,
        ordered by outcome then descending value
    """
    sections = []

    for outcome in OUTCOMES:
        states = top_states(state_totals, outcome, top_k)
        if not states:
            continue

        rows = state_category[
            (state_category["outcome"] == outcome) & (state_category["state"].isin(states))
        ].sort_values(["value", "state", "category"], ascending=[False, True, True], kind="mergesort")

        section = rows[["outcome", "state", "value", "category"]].copy()
        section["formatted"] = [format_value(v, outcome, units) for v in section["value"]]
        sections.append(section[REPORT_COLUMNS])

        logger.debug(f"{outcome}: top {len(states)} states {states}, {len(section)} rows")

    if not sections:
        return pd.DataFrame(columns=REPORT_COLUMNS)

    return pd.concat(sections, ignore_index=True)


def format_report(report: pd.DataFrame) -> str:
    """Render report rows as plain text, one block per outcome."""
    lines = []
    for outcome in OUTCOMES:
        block = report[report["outcome"] == outcome]
        if block.empty:
            continue
        lines.append(OUTCOME_LABELS.get(outcome, outcome))
        lines.append("-" * 50)
        for _, row in block.iterrows():
            lines.append(f"  {row['state']:<4} {row['formatted']:>16}  {row['category']}")
        lines.append("")
    return "\n".join(lines)
