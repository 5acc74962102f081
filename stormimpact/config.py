"""
stormimpact/config.py
---------------------
Shared configuration for all StormImpact modules.

Paths load from environment variables (or a .env file) with sensible
defaults. Pipeline options live in PipelineConfig.
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .regions import US_STATES

logger = logging.getLogger(__name__)

# Load .env file if it exists
load_dotenv()

# Project root (parent of this file's directory)
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Raw storm data (CSV, optionally bz2/gzip compressed)
DATA_DIR = Path(os.getenv("STORMIMPACT_DATA_DIR", PROJECT_ROOT / "data"))
DEFAULT_INPUT_PATH = DATA_DIR / "repdata-StormData.csv.bz2"

# Parquet tables and run stats written by `stormimpact run`
OUTPUT_DIR = Path(os.getenv("STORMIMPACT_OUTPUT_DIR", PROJECT_ROOT / "output"))

# Log directory
LOG_DIR = Path(os.getenv("STORMIMPACT_LOG_DIR", PROJECT_ROOT / "logs"))

# Outcome kinds, in report order
OUTCOMES = ("fatalities", "injuries", "property_damage")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}, using {default}")
        return default


def _default_categories():
    # Imported lazily: taxonomy depends on stormimpact.records
    from taxonomy.categories import STORM_CATEGORIES
    return list(STORM_CATEGORIES)


@dataclass
class PipelineConfig:
    """Configuration for one pipeline run."""

    # Version tracking
    version: str = "1.0.0"

    # Regions kept by the domain filter
    valid_regions: frozenset = field(default_factory=lambda: frozenset(US_STATES))

    # Ordered taxonomy, highest priority first, fallback last
    categories: list = field(default_factory=_default_categories)

    # Number of top-ranked states per outcome in the report
    top_k: int = 3

    # Begin-date format (time-of-day portion is ignored)
    date_format: str = "%m/%d/%Y"

    # Divisor applied to each outcome when melting to long form
    outcome_units: dict = field(default_factory=lambda: {
        "fatalities": 1,
        "injuries": 1,
        "property_damage": 1e9,  # billions of USD
    })

    # Parallel normalization/classification (1 = inline)
    workers: int = field(default_factory=lambda: _env_int("STORMIMPACT_WORKERS", 4))
    chunk_size: int = 50_000

    def __post_init__(self):
        self.valid_regions = frozenset(str(r).strip().upper() for r in self.valid_regions)
        if self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        missing = [o for o in OUTCOMES if o not in self.outcome_units]
        if missing:
            raise ValueError(f"outcome_units missing divisors for: {missing}")
        if any(self.outcome_units[o] <= 0 for o in OUTCOMES):
            raise ValueError("outcome_units divisors must be positive")


# Default configuration
PIPELINE_CONFIG = PipelineConfig()
