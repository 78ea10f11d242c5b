# main.py

"""Entry point for the price_stats application."""

import argparse
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("price_stats.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="price_stats",
        description="Average consumer price statistics explorer.",
    )
    parser.add_argument(
        "-q",
        "--query",
        default=None,
        help="Answer one query and exit. Omit for the interactive loop.",
    )
    parser.add_argument(
        "-d",
        "--data-dir",
        default=None,
        dest="data_dir",
        help=f"Folder of monthly tables (default: {Settings.DATA_DIR}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table", "text"],
        default="text",
        dest="output_format",
        help="Output format for --query (default: text).",
    )
    parser.add_argument(
        "--denomination",
        choices=["date_cutoff", "magnitude"],
        default=None,
        help="Redenomination rule (default: from settings).",
    )
    parser.add_argument(
        "--download",
        action="store_true",
        default=False,
        help="Download new source tables before collecting.",
    )
    parser.add_argument(
        "--scan",
        default=None,
        metavar="DIR",
        help="Scan a folder of <month>.<year>.csv files instead.",
    )
    parser.add_argument(
        "--region",
        default=Settings.DEFAULT_REGION,
        help="Region column used by --scan.",
    )
    return parser


def main() -> None:
    """Route to download, scan, one-shot query or interactive loop."""
    log_file = setup_logging()
    logger.info("price_stats starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()
    data_dir = Path(args.data_dir) if args.data_dir else Settings.DATA_DIR

    from src.cli import runner

    if args.scan is not None:
        if not args.query:
            parser.error("--scan requires --query")
        sys.exit(runner.run_scan(
            Path(args.scan),
            args.region,
            args.query,
            denomination=args.denomination or "magnitude",
        ))

    if args.download:
        runner.run_download(data_dir)

    engine = runner.build_engine(
        data_dir,
        denomination=args.denomination or Settings.DENOMINATION_STRATEGY,
    )
    if args.query is not None:
        sys.exit(runner.run_query(engine, args.query, args.output_format))

    try:
        exit_code = runner.interactive_loop(engine)
    finally:
        logger.info("price_stats shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
