"""
StormImpact Analytics

Filtering, aggregation and reporting over classified storm events, plus a
DuckDB layer for querying exported results.

Modules:
- window: analysis year window and valid-region filter
- aggregate: long-form outcomes, grouped totals, RMS scaling, ranks
- report: top-K states per outcome by category
- export: Parquet export of result tables
- views / cli: DuckDB views and SQL shell

Usage:
    # Launch interactive SQL shell over exported results
    python -m analytics.cli

    # Run a specific query
    python -m analytics.cli --query "SELECT * FROM top_states"
"""

__version__ = "1.0.0"
