"""
stormimpact/pipeline.py
-----------------------
End-to-end pipeline: normalize -> classify -> filter -> aggregate -> report.

Normalization and classification are pure per-record steps and run over
partitions in a thread pool. Filtering and aggregation run once over the
merged, immutable record list.

Usage:
    from stormimpact.loader import load_records
    from stormimpact.pipeline import run_pipeline

    result = run_pipeline(load_records("repdata-StormData.csv.bz2"))
    print(result["report"])
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from analytics.aggregate import aggregate_records
from analytics.report import build_report
from analytics.window import filter_records
from normalization.fields import normalize_records
from taxonomy.classifier import EventClassifier, category_distribution, unmatched_event_types

from .config import PIPELINE_CONFIG, PipelineConfig

logger = logging.getLogger(__name__)


def _partition(items: list, size: int) -> list[list]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def _process_partition(raws, date_format: str, classifier: EventClassifier):
    normalized, dropped = normalize_records(raws, date_format)
    return [classifier.classify_record(r) for r in normalized], dropped


def normalize_and_classify(
    raws,
    config: PipelineConfig,
    classifier: EventClassifier,
) -> tuple[list, int]:
    """
    Normalize and classify raw records, in parallel when configured.

    Returns:
        Tuple of (classified records in input order, malformed-date drop count)
    """
    raws = list(raws)
    partitions = _partition(raws, config.chunk_size)

    if config.workers <= 1 or len(partitions) <= 1:
        results = [_process_partition(p, config.date_format, classifier) for p in partitions]
    else:
        logger.info(f"Processing {len(partitions)} partitions with {config.workers} workers")
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            # map() yields in submission order, so partition order is kept
            results = list(executor.map(
                lambda p: _process_partition(p, config.date_format, classifier),
                partitions,
            ))

    classified = []
    dropped = 0
    for records, n_dropped in results:
        classified.extend(records)
        dropped += n_dropped

    return classified, dropped


def run_pipeline(raws, config: PipelineConfig | None = None) -> dict:
    """
    Run the full classification and aggregation pipeline.

    Args:
        raws: Iterable of RawRecord
        config: PipelineConfig instance (uses default if None)

    Returns:
        Dict with keys: stats, classified, outcomes, state_category,
        state_totals, year_category, category_totals, report

    Raises:
        EmptyDomainError: If no non-Convection record anchors the year window
    """
    config = config or PIPELINE_CONFIG
    start_time = time.time()

    logger.info("=" * 60)
    logger.info("Starting StormImpact Pipeline")
    logger.info("=" * 60)
    logger.info(f"Config version: {config.version}")

    classifier = EventClassifier(config.categories)

    # Step 1-2: Normalize and classify
    logger.info("Step 1: Normalizing and classifying records...")
    raws = list(raws)
    classified, dropped_dates = normalize_and_classify(raws, config, classifier)
    if dropped_dates:
        logger.warning(f"Dropped {dropped_dates:,} records with malformed begin dates")

    distribution = category_distribution(classified)
    logger.info(f"Classified {len(classified):,} records: {dict(distribution)}")

    unmatched = unmatched_event_types(classified, classifier.fallback, limit=5)
    if unmatched:
        logger.debug(f"Most frequent {classifier.fallback} labels: {unmatched}")

    # Step 3: Filter to window and valid regions
    logger.info("Step 2: Filtering to analysis window and valid regions...")
    filtered, filter_stats = filter_records(classified, config.valid_regions)

    # Step 4: Aggregate
    logger.info("Step 3: Aggregating outcomes...")
    tables = aggregate_records(filtered, config.outcome_units)

    # Step 5: Report view
    logger.info("Step 4: Building report view...")
    report = build_report(
        tables["state_totals"],
        tables["state_category"],
        top_k=config.top_k,
        units=config.outcome_units,
    )

    total_time = time.time() - start_time

    stats = {
        "timestamp": datetime.now().isoformat(),
        "config_version": config.version,
        "records": {
            "input": len(raws),
            "malformed_date": dropped_dates,
            "classified": len(classified),
            "out_of_window": filter_stats.out_of_window,
            "out_of_domain": filter_stats.out_of_domain,
            "kept": filter_stats.kept,
        },
        "window": {
            "min_year": filter_stats.min_year,
            "max_year": filter_stats.max_year,
        },
        "categories": {code: distribution.get(code, 0) for code in classifier_codes(classifier)},
        "top_k": config.top_k,
        "outcome_units": dict(config.outcome_units),
        "performance": {
            "total_time_sec": round(total_time, 2),
            "records_per_sec": round(len(raws) / total_time, 1) if total_time > 0 else 0,
        },
    }

    logger.info("=" * 60)
    logger.info("StormImpact Pipeline Complete!")
    logger.info(f"  Records kept: {filter_stats.kept:,} of {len(raws):,}")
    logger.info(f"  Window: {filter_stats.min_year}-{filter_stats.max_year}")
    logger.info(f"  Report rows: {len(report):,}")
    logger.info(f"  Total time: {total_time:.1f}s")
    logger.info("=" * 60)

    return {
        "stats": stats,
        "classified": classified,
        "report": report,
        **tables,
    }


def classifier_codes(classifier: EventClassifier) -> list[str]:
    """Category codes of a classifier, in priority order."""
    return [cat.code for cat in classifier.categories]
