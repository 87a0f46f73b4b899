# main.py

"""Entry point for the appstore_discounts tracker."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("appstore_discounts.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    valid_regions = ", ".join(Settings.SUPPORTED_REGIONS)

    parser = argparse.ArgumentParser(
        prog="appstore_discounts",
        description=(
            "Track App Store prices per region and publish "
            "price drops as feeds."
        ),
        epilog=f"Available regions: {valid_regions}",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        dest="input_path",
        help="Snapshot batch JSON: {region: [appInfo, ...]}.",
    )
    parser.add_argument(
        "-r",
        "--regions",
        default=None,
        help="Comma-separated region codes (default: configured regions).",
    )
    parser.add_argument(
        "-t",
        "--timestamp",
        type=int,
        default=None,
        help="Observation time in epoch milliseconds (default: now).",
    )
    parser.add_argument(
        "--storage-dir",
        default=None,
        help="History directory (default: data/storage/).",
    )
    parser.add_argument(
        "--feeds-dir",
        default=None,
        help="Feed output directory (default: data/feeds/).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format for detected discounts (default: table).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Detect discounts without writing history or feeds.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO logs to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run one tracker pass."""
    from src.cli.runner import run_update

    args = _build_parser().parse_args(argv)
    log_file = setup_logging(verbose=args.verbose)
    logger.info("appstore_discounts starting, log file: %s", log_file)

    try:
        return run_update(
            input_path=args.input_path,
            region_csv=args.regions,
            timestamp=args.timestamp,
            storage_dir=args.storage_dir,
            feeds_dir=args.feeds_dir,
            output_format=args.output_format,
            dry_run=args.dry_run,
        )
    except Exception:
        logger.critical("Fatal error during tracker run", exc_info=True)
        raise
    finally:
        logger.info("appstore_discounts run finished")


if __name__ == "__main__":
    sys.exit(main())
