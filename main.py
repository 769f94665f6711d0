# main.py

"""Entry point for the storefront_search command line client."""

import argparse
import asyncio
import logging
import sys

from storefront_search.config.logging_config import setup_logging
from storefront_search.config.settings import Settings

logger = logging.getLogger("storefront_search.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    activities = ", ".join(Settings.ACTIVITY_LABELS)

    parser = argparse.ArgumentParser(
        prog="storefront_search",
        description="Search a headless WooCommerce store via Smart Search.",
        epilog=f"Known activities: {activities}",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Search keywords. Optional with --min-price/--max-price/--category.",
    )
    parser.add_argument(
        "-a",
        "--activity",
        default=None,
        help="Search by activity value instead of keywords.",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=None,
        help="Restrict results to a product category.",
    )
    parser.add_argument(
        "--min-price",
        type=float,
        default=None,
        dest="price_min",
        help="Lower price bound (inclusive).",
    )
    parser.add_argument(
        "--max-price",
        type=float,
        default=None,
        dest="price_max",
        help="Upper price bound (inclusive).",
    )
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=None,
        help=f"Maximum number of results (default: {Settings.RESULTS_LIMIT}).",
    )
    parser.add_argument(
        "-d",
        "--details",
        action="store_true",
        default=False,
        help="Fetch image, price and stock data for keyword searches.",
    )
    parser.add_argument(
        "--context",
        action="store_true",
        default=False,
        help="Run a semantic similarity search for the query text.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    return parser


def _has_target(args: argparse.Namespace) -> bool:
    """True when the arguments name something to search for."""
    return any(
        value is not None
        for value in (
            args.query,
            args.activity,
            args.category,
            args.price_min,
            args.price_max,
        )
    )


def main() -> None:
    """Parse arguments and run a single headless search."""
    log_file = setup_logging()
    logger.info("storefront_search starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if not _has_target(args):
        parser.error(
            "give a query, --activity, --category or a price bound"
        )
    if args.context and args.query is None:
        parser.error("--context needs a query")

    from storefront_search.cli.runner import cli_search, option_conflict

    conflict = option_conflict(
        query=args.query,
        activity=args.activity,
        category=args.category,
        price_min=args.price_min,
        price_max=args.price_max,
        context=args.context,
    )
    if conflict is not None:
        parser.error(conflict)

    try:
        exit_code = asyncio.run(
            cli_search(
                query=args.query,
                activity=args.activity,
                category=args.category,
                price_min=args.price_min,
                price_max=args.price_max,
                limit=args.limit,
                context=args.context,
                details=args.details,
                output_format=args.output_format,
            )
        )
    except Exception:
        logger.critical("Fatal error during CLI run", exc_info=True)
        raise
    finally:
        logger.info("storefront_search shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
