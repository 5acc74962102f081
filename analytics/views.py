"""
Pre-built analytical views for StormImpact DuckDB analytics.

These views sit on top of the exported result tables (state_category,
state_totals, year_category, category_totals) for quick analysis.
"""

import logging

import duckdb

logger = logging.getLogger(__name__)

# View definitions
VIEWS = {
    "outcome_summary": """
        CREATE OR REPLACE VIEW outcome_summary AS
        SELECT
            outcome,
            COUNT(DISTINCT state) as states,
            ROUND(SUM(value), 2) as total,
            ROUND(MAX(value), 2) as max_state_total
        FROM state_totals
        GROUP BY outcome
        ORDER BY outcome
    """,

    "top_states": """
        CREATE OR REPLACE VIEW top_states AS
        SELECT outcome, rank, state, ROUND(value, 2) as value
        FROM state_totals
        WHERE rank <= 10
        ORDER BY outcome, rank
    """,

    "category_share": """
        CREATE OR REPLACE VIEW category_share AS
        SELECT
            outcome,
            category,
            ROUND(value, 2) as value,
            ROUND(100.0 * value / NULLIF(SUM(value) OVER (PARTITION BY outcome), 0), 1) as pct
        FROM category_totals
        ORDER BY outcome, value DESC
    """,

    "dominant_category_by_state": """
        CREATE OR REPLACE VIEW dominant_category_by_state AS
        SELECT state, outcome, category, ROUND(value, 2) as value
        FROM (
            SELECT
                *,
                ROW_NUMBER() OVER (
                    PARTITION BY state, outcome ORDER BY value DESC, category
                ) as rn
            FROM state_category
        )
        WHERE rn = 1
        ORDER BY outcome, value DESC
    """,

    "timeline_by_decade": """
        CREATE OR REPLACE VIEW timeline_by_decade AS
        SELECT
            (year // 10) * 10 as decade,
            category,
            outcome,
            ROUND(SUM(value), 2) as value
        FROM year_category
        GROUP BY decade, category, outcome
        ORDER BY outcome, decade, category
    """,
}


def register_views(conn: duckdb.DuckDBPyConnection) -> list[str]:
    """
    Register all pre-built views in the DuckDB connection.

    Views whose source tables are missing are skipped with a warning.

    Returns:
        List of registered view names
    """
    registered = []

    for name, sql in VIEWS.items():
        try:
            conn.execute(sql)
            registered.append(name)
        except duckdb.Error as e:
            logger.warning(f"Could not create view '{name}': {e}")

    return registered


def list_views() -> list[str]:
    """Return list of all available view names."""
    return list(VIEWS.keys())
