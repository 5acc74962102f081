"""
analytics/cli.py
----------------
SQL access to exported StormImpact results.

Loads the Parquet tables written by `stormimpact run` into an in-memory
DuckDB database, registers the analytical views, then either runs a single
query or reads statements from a prompt until EOF or `.exit`.

Usage:
    python -m analytics.cli                                   # Prompt
    python -m analytics.cli --query "SELECT * FROM top_states"
    python -m analytics.cli --output-dir output/
"""

import argparse
import logging
import sys
from pathlib import Path

import duckdb

from analytics.export import EXPORT_TABLES, sql_path
from analytics.views import list_views, register_views
from stormimpact.config import OUTPUT_DIR

logger = logging.getLogger(__name__)

# outcomes.parquet is only written with --include-outcomes
QUERYABLE_TABLES = EXPORT_TABLES + ("outcomes",)

EXAMPLE_QUERIES = [
    "SELECT * FROM top_states WHERE outcome = 'fatalities' AND rank <= 5;",
    "SELECT * FROM category_share;",
    "SELECT * FROM dominant_category_by_state WHERE outcome = 'property_damage';",
    "SELECT * FROM timeline_by_decade WHERE category = 'Flood';",
]


def exported_tables(output_dir: Path) -> dict[str, Path]:
    """Parquet files present in an export directory, by table name."""
    paths = {name: Path(output_dir) / f"{name}.parquet" for name in QUERYABLE_TABLES}
    return {name: path for name, path in paths.items() if path.exists()}


def setup_connection(output_dir: Path = OUTPUT_DIR) -> duckdb.DuckDBPyConnection:
    """In-memory DuckDB connection with exported tables and views loaded."""
    conn = duckdb.connect(":memory:")
    found = exported_tables(output_dir)

    for name, path in found.items():
        conn.execute(f"CREATE TABLE {name} AS SELECT * FROM read_parquet({sql_path(path)})")

    missing = [name for name in EXPORT_TABLES if name not in found]
    if missing:
        logger.warning(f"Missing exported tables in {output_dir}: {missing}")

    register_views(conn)
    return conn


def row_counts(conn: duckdb.DuckDBPyConnection) -> dict[str, int]:
    """Row count of every loaded base table, by name."""
    names = conn.execute(
        "SELECT table_name FROM information_schema.tables "
        "WHERE table_type = 'BASE TABLE' ORDER BY table_name"
    ).fetchall()
    return {
        name: conn.execute(f"SELECT COUNT(*) FROM {name}").fetchone()[0]
        for (name,) in names
    }


def run_query(conn: duckdb.DuckDBPyConnection, query: str) -> bool:
    """Execute one statement and print its result. Returns False on SQL errors."""
    try:
        result = conn.execute(query)
    except duckdb.Error as e:
        print(f"Error: {e}")
        return False

    if result.description is None:
        print("OK")
        return True

    df = result.fetchdf()
    print(df.to_string(index=False) if len(df) else "(0 rows)")
    return True


def _show_tables(conn, arg):
    for name, count in row_counts(conn).items():
        print(f"  {name:<18} {count:>10,} rows")


def _show_views(conn, arg):
    for name in list_views():
        print(f"  {name}")


def _describe(conn, arg):
    if not arg:
        print("Usage: .schema NAME")
        return
    run_query(conn, f"DESCRIBE {arg}")


def _show_examples(conn, arg):
    for query in EXAMPLE_QUERIES:
        print(f"  {query}")


def _show_help(conn, arg):
    for name, (_, help_text) in DOT_COMMANDS.items():
        print(f"  {name:<10} {help_text}")
    print(f"  {'.exit':<10} Leave the shell")


# Dot command -> (handler(conn, arg), help text)
DOT_COMMANDS = {
    ".help": (_show_help, "List commands"),
    ".tables": (_show_tables, "Loaded tables and row counts"),
    ".views": (_show_views, "Pre-built views"),
    ".schema": (_describe, "Columns of a table or view"),
    ".examples": (_show_examples, "Example queries"),
}
EXIT_COMMANDS = {".exit", ".quit"}


def read_statements(read_line):
    """
    Yield SQL statements and dot commands from a line reader.

    A SQL statement may span lines and ends at a line whose last non-blank
    character is ';'. Dot commands are only recognized at the start of a
    statement. Ctrl-C discards the pending statement; EOF ends the stream.
    """
    buffer = []
    while True:
        try:
            line = read_line("...> " if buffer else "storm> ")
        except EOFError:
            return
        except KeyboardInterrupt:
            buffer = []
            continue

        stripped = line.strip()
        if not buffer and stripped.startswith("."):
            yield stripped
            continue

        if stripped:
            buffer.append(line)
        if buffer and stripped.endswith(";"):
            yield "\n".join(buffer)
            buffer = []


def interactive_shell(conn: duckdb.DuckDBPyConnection, output_dir: Path, read_line=None):
    """Prompt for statements until EOF or an exit command."""
    read_line = read_line or input
    counts = row_counts(conn)
    print(f"\nStormImpact results: {output_dir}")
    print(" | ".join(f"{name}: {count:,}" for name, count in counts.items()) or "(no tables loaded)")
    print("Enter SQL ending in ';', or .help for commands.\n")

    for statement in read_statements(read_line):
        if not statement.startswith("."):
            run_query(conn, statement)
            continue

        command, _, arg = statement.partition(" ")
        command = command.lower()
        if command in EXIT_COMMANDS:
            break

        entry = DOT_COMMANDS.get(command)
        if entry is None:
            print(f"Unknown command {command}; try .help")
        else:
            entry[0](conn, arg.strip())


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="StormImpact Analytics CLI - DuckDB query interface"
    )
    parser.add_argument("--query", "-q", help="Run a single query and exit")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_DIR,
        help=f"Directory with exported results (default: {OUTPUT_DIR})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s - %(message)s")

    if not exported_tables(args.output_dir):
        print(f"No exported results in {args.output_dir}. Run the pipeline first:")
        print("  stormimpact run --input <StormData.csv.bz2>")
        sys.exit(1)

    conn = setup_connection(args.output_dir)
    try:
        if args.query:
            ok = run_query(conn, args.query)
        else:
            interactive_shell(conn, args.output_dir)
            ok = True
    finally:
        conn.close()

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
