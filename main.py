# main.py

"""Entry point for the listro command-line client."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("listro.main")


def _add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )


def _add_details(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("subcategory", help="Product subcategory.")
    parser.add_argument(
        "-d",
        "--detail",
        action="append",
        default=None,
        dest="details",
        metavar="KEY=VALUE",
        help="Product detail sent to the generator (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="listro",
        description="Client for the listro catalog and AI backends.",
        epilog=(
            f"Primary backend: {Settings.PRIMARY_BACKEND_URL}  "
            f"AI backend: {Settings.AI_BACKEND_URL}"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo request diagnostics to stderr.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    sheet = commands.add_parser("sheet", help="Fetch the seller sheet.")
    _add_format(sheet)

    golden = commands.add_parser(
        "golden", help="Fetch the golden sheet (filters and headers)."
    )
    _add_format(golden)

    scrape = commands.add_parser("scrape", help="Scrape a product URL.")
    scrape.add_argument("url", help="Product page URL.")
    _add_format(scrape)

    sellers = commands.add_parser(
        "sellers", help="List seller rows for a category."
    )
    sellers.add_argument(
        "category",
        nargs="?",
        default=None,
        help=f"Category name (default: {Settings.ALL_CATEGORIES}).",
    )
    _add_format(sellers)

    for kind, help_text in (
        ("title", "Generate a product title."),
        ("description", "Generate a product description."),
        ("copy", "Generate title and description together."),
    ):
        _add_details(commands.add_parser(kind, help=help_text))

    image = commands.add_parser(
        "image", help="Restyle a product image with the AI backend."
    )
    image.add_argument("path", help="Local image file.")
    image.add_argument(
        "-s",
        "--style",
        type=int,
        default=0,
        dest="style_index",
        help="Style index (default: 0).",
    )
    image.add_argument(
        "-a",
        "--attribute",
        action="append",
        default=None,
        dest="attributes",
        metavar="KEY=VALUE",
        help="Image attribute (repeatable).",
    )

    commands.add_parser("health", help="Check both backends respond.")
    return parser


def _dispatch(args: argparse.Namespace) -> int:
    """Run the coroutine for the selected sub-command."""
    from src.cli import runner

    if args.command in ("sheet", "golden"):
        coro = runner.run_sheet(
            args.command == "golden", args.output_format
        )
    elif args.command == "scrape":
        coro = runner.run_scrape(args.url, args.output_format)
    elif args.command == "sellers":
        coro = runner.run_sellers(args.category, args.output_format)
    elif args.command in ("title", "description", "copy"):
        coro = runner.run_generate(
            args.command, args.subcategory, args.details
        )
    elif args.command == "image":
        coro = runner.run_image(
            args.path, args.style_index, args.attributes
        )
    else:
        coro = runner.run_health_check()
    return asyncio.run(coro)


def main() -> None:
    """Parse arguments, configure logging and run one command."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(verbose=args.verbose)
    logger.info("listro %s starting, log file: %s", args.command, log_file)

    try:
        exit_code = _dispatch(args)
    except Exception:
        logger.critical("Fatal error during %s", args.command, exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
