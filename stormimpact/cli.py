"""
stormimpact/cli.py
------------------
Command-line interface for the StormImpact pipeline.

Usage:
    stormimpact run                          # Full pipeline on the default input
    stormimpact run --input FILE --top-k 5   # Custom input and report size
    stormimpact report                       # Print report from exported results
    stormimpact classify "TSTM WIND" "HEAT"  # Classify event labels
    stormimpact categories                   # List taxonomy categories
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path


def setup_logging(command: str, verbose: bool = False, log_to_file: bool = True) -> logging.Logger:
    """Configure logging to console and file."""
    from .config import LOG_DIR

    log_level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)

    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
        log_file = LOG_DIR / f"stormimpact_{command}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        root_logger.addHandler(file_handler)
        logger.info(f"Logging to {log_file}")

    return logger


def cmd_run(args, logger):
    """Run the full pipeline and export results."""
    from analytics.export import export_results
    from analytics.report import format_report

    from .config import PipelineConfig
    from .errors import EmptyDomainError
    from .loader import load_records
    from .pipeline import run_pipeline

    overrides = {"top_k": args.top_k}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.date_format:
        overrides["date_format"] = args.date_format

    try:
        config = PipelineConfig(**overrides)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        raws = load_records(args.input, nrows=args.limit)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    try:
        result = run_pipeline(raws, config)
    except EmptyDomainError as e:
        logger.error(f"Pipeline aborted: {e}")
        return 1

    paths = export_results(result, args.output, include_outcomes=args.include_outcomes)

    stats = result["stats"]
    records = stats["records"]

    print("\n" + "=" * 60)
    print("STORMIMPACT PIPELINE COMPLETE")
    print("=" * 60)
    print(f"Records read:        {records['input']:,}")
    print(f"  Malformed dates:   {records['malformed_date']:,}")
    print(f"  Out of window:     {records['out_of_window']:,}")
    print(f"  Outside regions:   {records['out_of_domain']:,}")
    print(f"  Kept:              {records['kept']:,}")
    print(f"Window:              {stats['window']['min_year']}-{stats['window']['max_year']}")

    print("\nCategory Distribution:")
    for code, count in stats["categories"].items():
        print(f"  {code:22} {count:>10,}")

    print(f"\nTop {config.top_k} states per outcome:\n")
    print(format_report(result["report"]))

    print("Output files:")
    for name, path in paths.items():
        print(f"  {name}: {path}")
    print("=" * 60)

    return 0


def cmd_report(args, logger):
    """Print the report from previously exported results."""
    from analytics.export import load_results
    from analytics.report import build_report, format_report

    try:
        results = load_results(args.output)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    if args.top_k is None:
        report = results["report"]
    else:
        report = build_report(
            results["state_totals"],
            results["state_category"],
            top_k=args.top_k,
            units=results["stats"].get("outcome_units"),
        )

    print(format_report(report))
    return 0


def cmd_classify(args, logger):
    """Classify event labels given on the command line."""
    from taxonomy.classifier import get_default_classifier

    classifier = get_default_classifier()

    for text in args.labels:
        category = classifier.classify(text)
        matches = classifier.matching_categories(text)
        detail = f"  (matched: {', '.join(matches)})" if len(matches) > 1 else ""
        print(f"{text:40} -> {category}{detail}")

    return 0


def cmd_categories(args, logger):
    """List taxonomy categories in priority order."""
    from taxonomy.categories import get_all_categories

    print("\nStorm Event Categories (priority order)")
    print("=" * 60)
    for cat in get_all_categories():
        print(f"{cat.priority}. {cat.code}")
        print(f"   {cat.description}")
        if args.patterns:
            for pattern in cat.patterns:
                print(f"     /{pattern}/")
        elif cat.is_fallback:
            print("   (fallback)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    from .config import DEFAULT_INPUT_PATH, OUTPUT_DIR

    parser = argparse.ArgumentParser(
        prog="stormimpact",
        description="StormImpact - Storm event classification and impact ranking",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Run the full pipeline")
    run_parser.add_argument(
        "--input", "-i",
        type=Path,
        default=DEFAULT_INPUT_PATH,
        help=f"Storm data CSV, optionally compressed (default: {DEFAULT_INPUT_PATH})",
    )
    run_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=OUTPUT_DIR,
        help=f"Directory for exported results (default: {OUTPUT_DIR})",
    )
    run_parser.add_argument("--top-k", type=int, default=3, help="States per outcome in report (default: 3)")
    run_parser.add_argument("--workers", type=int, help="Worker threads for normalization")
    run_parser.add_argument("--date-format", help="Begin-date format (default: %%m/%%d/%%Y)")
    run_parser.add_argument("--limit", type=int, metavar="N", help="Read only the first N rows")
    run_parser.add_argument(
        "--include-outcomes",
        action="store_true",
        help="Also export long-form outcome rows",
    )
    run_parser.set_defaults(func=cmd_run)

    # report command
    report_parser = subparsers.add_parser("report", help="Print report from exported results")
    report_parser.add_argument("--output", "-o", type=Path, default=OUTPUT_DIR, help="Results directory")
    report_parser.add_argument("--top-k", type=int, help="Rebuild report with a different K")
    report_parser.set_defaults(func=cmd_report)

    # classify command
    classify_parser = subparsers.add_parser("classify", help="Classify event labels")
    classify_parser.add_argument("labels", nargs="+", help="Event type labels")
    classify_parser.set_defaults(func=cmd_classify)

    # categories command
    categories_parser = subparsers.add_parser("categories", help="List taxonomy categories")
    categories_parser.add_argument("--patterns", action="store_true", help="Show matching patterns")
    categories_parser.set_defaults(func=cmd_categories)

    return parser


def main(argv=None):
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logger = setup_logging(
        args.command,
        verbose=args.verbose,
        log_to_file=args.command in ("run", "report"),
    )
    sys.exit(args.func(args, logger))


if __name__ == "__main__":
    main()
