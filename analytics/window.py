"""
analytics/window.py
-------------------
Restrict classified records to the analysis window and valid regions.

Convection events were recorded decades before the other categories, so
the lower year bound comes from non-Convection records only. Keeping the
early Convection-only years would bias every cross-category comparison.
"""

import logging
from dataclasses import dataclass

from stormimpact.errors import EmptyDomainError
from taxonomy.categories import CONVECTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterStats:
    """Counts from one filtering pass."""
    input: int
    out_of_window: int
    out_of_domain: int
    kept: int
    min_year: int
    max_year: int

    def to_dict(self) -> dict:
        return {
            "input": self.input,
            "out_of_window": self.out_of_window,
            "out_of_domain": self.out_of_domain,
            "kept": self.kept,
            "min_year": self.min_year,
            "max_year": self.max_year,
        }


def compute_year_window(records, anchor_exclude: str = CONVECTION) -> tuple[int, int]:
    """
    Compute (min_year, max_year) for a collection of classified records.

    min_year is the earliest year among records NOT in `anchor_exclude`;
    max_year is the latest year among all records.

    Raises:
        EmptyDomainError: If no record outside `anchor_exclude` exists
    """
    anchor_years = [r.year for r in records if r.category != anchor_exclude]
    if not anchor_years:
        raise EmptyDomainError(
            f"No non-{anchor_exclude} records found; cannot anchor the analysis window"
        )

    min_year = min(anchor_years)
    max_year = max(r.year for r in records)
    return min_year, max_year


def filter_records(records, valid_regions) -> tuple[list, FilterStats]:
    """
    Keep records inside the year window whose state is a valid region.

    Args:
        records: Classified records
        valid_regions: Collection of valid (upper-case) region codes

    Returns:
        Tuple of (kept records in input order, FilterStats)

    Raises:
        EmptyDomainError: Propagated from compute_year_window
    """
    records = list(records)
    valid_regions = frozenset(valid_regions)
    min_year, max_year = compute_year_window(records)

    kept = []
    out_of_window = 0
    out_of_domain = 0

    for r in records:
        if not min_year <= r.year <= max_year:
            out_of_window += 1
        elif r.state not in valid_regions:
            out_of_domain += 1
        else:
            kept.append(r)

    stats = FilterStats(
        input=len(records),
        out_of_window=out_of_window,
        out_of_domain=out_of_domain,
        kept=len(kept),
        min_year=min_year,
        max_year=max_year,
    )

    logger.info(
        f"Window {min_year}-{max_year}: kept {stats.kept:,} of {stats.input:,} records "
        f"({out_of_window:,} out of window, {out_of_domain:,} outside valid regions)"
    )

    return kept, stats
