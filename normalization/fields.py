"""
normalization/fields.py
-----------------------
Per-record field normalization.

Every function here is pure, so records can be normalized one at a time
or in parallel partitions.
"""

import logging
import math
from datetime import date, datetime

from stormimpact.errors import MalformedDateError
from stormimpact.records import NormalizedRecord, RawRecord

logger = logging.getLogger(__name__)

# Scale suffix -> multiplier. Anything else (digits, "+", "?", ...) counts as 1.
MAGNITUDE_MULTIPLIERS = {
    "": 1,
    "H": 100,
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}

DEFAULT_DATE_FORMAT = "%m/%d/%Y"


def _is_missing(value) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def magnitude_multiplier(suffix) -> int:
    """
    Look up the multiplier for a scale suffix.

    Examples:
        >>> magnitude_multiplier("k")
        1000
        >>> magnitude_multiplier("?")
        1
    """
    if _is_missing(suffix):
        return 1
    return MAGNITUDE_MULTIPLIERS.get(str(suffix).strip().upper(), 1)


def resolve_magnitude(magnitude, suffix) -> float:
    """
    Resolve a (magnitude, suffix) pair into an absolute quantity.

    Args:
        magnitude: Non-negative magnitude code (missing counts as 0)
        suffix: Scale suffix, case-insensitive

    Returns:
        magnitude x multiplier(suffix) as float

    Examples:
        >>> resolve_magnitude(2.5, "K")
        2500.0
    """
    if _is_missing(magnitude):
        return 0.0
    return float(magnitude) * magnitude_multiplier(suffix)


def parse_begin_date(text, date_format: str = DEFAULT_DATE_FORMAT) -> date:
    """
    Parse a begin-date string, ignoring any time-of-day portion.

    "4/18/1950 0:00:00" parses to date(1950, 4, 18) with the default format.

    Raises:
        MalformedDateError: If the text is missing or does not match the format
    """
    if _is_missing(text):
        raise MalformedDateError(text, date_format)

    parts = str(text).strip().split()
    if not parts:
        raise MalformedDateError(text, date_format)

    try:
        return datetime.strptime(parts[0], date_format).date()
    except ValueError as e:
        raise MalformedDateError(text, date_format) from e


def _count(value) -> int:
    if _is_missing(value):
        return 0
    return int(value)


def normalize_record(raw: RawRecord, date_format: str = DEFAULT_DATE_FORMAT) -> NormalizedRecord:
    """
    Normalize one raw record.

    Raises:
        MalformedDateError: If the begin date cannot be parsed
    """
    return NormalizedRecord(
        event_type=str(raw.event_type or "").strip().upper(),
        state=str(raw.state or "").strip().upper(),
        fatalities=_count(raw.fatalities),
        injuries=_count(raw.injuries),
        property_damage=resolve_magnitude(raw.prop_dmg, raw.prop_dmg_exp),
        crop_damage=resolve_magnitude(raw.crop_dmg, raw.crop_dmg_exp),
        date=parse_begin_date(raw.begin_date, date_format),
    )


def normalize_records(
    raws,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> tuple[list[NormalizedRecord], int]:
    """
    Normalize a batch of raw records, dropping those with malformed dates.

    Returns:
        Tuple of (normalized records in input order, number of dropped records)
    """
    normalized = []
    dropped = 0

    for raw in raws:
        try:
            normalized.append(normalize_record(raw, date_format))
        except MalformedDateError as e:
            dropped += 1
            logger.debug(f"Dropping record: {e}")

    if dropped:
        logger.debug(f"Dropped {dropped:,} of {dropped + len(normalized):,} records (malformed begin date)")

    return normalized, dropped
