"""
Parquet export for StormImpact pipeline results.

Writes each result table to <output_dir>/<table>.parquet with DuckDB
(ZSTD compression) and the run statistics to run_stats.json.

Usage:
    stormimpact run --output output/
"""

import json
import logging
from pathlib import Path

import duckdb
import pandas as pd
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)

# Tables written by export_results, in write order
EXPORT_TABLES = (
    "state_category",
    "state_totals",
    "year_category",
    "category_totals",
    "report",
)

STATS_FILENAME = "run_stats.json"


def sql_path(path: Path) -> str:
    """Quote a file path as a DuckDB string literal."""
    escaped = Path(path).as_posix().replace("'", "''")
    return f"'{escaped}'"


def write_table(conn: duckdb.DuckDBPyConnection, df: pd.DataFrame, parquet_path: Path) -> int:
    """Write one DataFrame to Parquet through DuckDB."""
    conn.register("export_df", df)
    try:
        conn.execute(f"""
            COPY (SELECT * FROM export_df)
            TO {sql_path(parquet_path)} (FORMAT PARQUET, COMPRESSION ZSTD)
        """)
    finally:
        conn.unregister("export_df")

    logger.info(f"  Written {len(df):,} rows -> {parquet_path.name} "
                f"({parquet_path.stat().st_size / 1024:.1f} KB)")
    return len(df)


def export_results(result: dict, output_dir: Path | str, include_outcomes: bool = False) -> dict:
    """
    Export pipeline result tables and stats.

    Args:
        result: Dict returned by stormimpact.pipeline.run_pipeline
        output_dir: Directory for parquet files
        include_outcomes: Also write the long-form outcome rows (large)

    Returns:
        Dict of table name -> written path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Exporting results to {output_dir}")

    tables = list(EXPORT_TABLES)
    if include_outcomes:
        tables.append("outcomes")

    paths = {}
    conn = duckdb.connect(":memory:")
    try:
        for name in tables:
            df = result.get(name)
            if df is None:
                logger.warning(f"Result has no '{name}' table, skipping")
                continue
            parquet_path = output_dir / f"{name}.parquet"
            write_table(conn, df, parquet_path)
            paths[name] = parquet_path
    finally:
        conn.close()

    stats_path = output_dir / STATS_FILENAME
    with open(stats_path, "w", encoding="utf-8") as f:
        json.dump(result.get("stats", {}), f, indent=2, default=str)
    paths["stats"] = stats_path

    return paths


def load_results(output_dir: Path | str) -> dict:
    """
    Load previously exported tables and stats.

    Raises:
        FileNotFoundError: If the directory holds no exported results
    """
    output_dir = Path(output_dir)
    stats_path = output_dir / STATS_FILENAME

    if not stats_path.exists():
        raise FileNotFoundError(
            f"No exported results found in {output_dir}. "
            "Run `stormimpact run` first."
        )

    results = {}
    for name in EXPORT_TABLES + ("outcomes",):
        parquet_path = output_dir / f"{name}.parquet"
        if parquet_path.exists():
            results[name] = pq.read_table(parquet_path).to_pandas()

    with open(stats_path, "r", encoding="utf-8") as f:
        results["stats"] = json.load(f)

    return results
