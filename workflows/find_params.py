#!/usr/bin/env python3
"""
Find Params Workflow - Collect URLs with query parameters from web archives.

Queries the Wayback Machine and Common Crawl for every target domain at once,
keeps URLs that carry key=value query parameters, and writes them to a text
file, one per line.

Usage:
    uv run python -m workflows.find_params --domains example.com
    uv run python -m workflows.find_params -d example.com,example.org -o params.txt
    uv run python -m workflows.find_params -d example.com --sources wayback --timeout 30s
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lib.archive.registry import list_sources
from services.paramfinder.config import DEFAULT_OUTPUT, ConfigError, FinderConfig
from services.paramfinder.service import Service

USAGE = (
    "Usage: find_params --domains <domain1,domain2,...> [--output <output_file>] "
    "[--sources <source1,source2,...>] [--timeout <duration>]"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find URLs with query parameters in web archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Defaults can also be set with PARAMFINDER_OUTPUT, PARAMFINDER_SOURCES,
PARAMFINDER_TIMEOUT and PARAMFINDER_CC_INDEX (a .env file is read).

Examples:
    # Both archives, default output file
    uv run python -m workflows.find_params -d example.com

    # Wayback only, longer timeout
    uv run python -m workflows.find_params -d example.com -s wayback -t 1m
""",
    )
    parser.add_argument(
        "--domains",
        "-d",
        default="",
        help="Comma-separated list of domains to search for parameter URLs",
    )
    parser.add_argument(
        "--output",
        "-o",
        help=f"Output file to save URLs with parameters (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--sources",
        "-s",
        help=f"Comma-separated list of sources (default: {','.join(list_sources())})",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        help="Timeout for HTTP requests, e.g. 10s, 500ms, 1m (default: 10s)",
    )
    parser.add_argument(
        "--cc-index",
        help="Common Crawl index id (default: CC-MAIN-2023-04)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-task details",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {message}",
    )


async def run(argv: Optional[List[str]] = None) -> int:
    """Run the workflow. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = FinderConfig.from_strings(
            args.domains,
            sources=args.sources,
            output=args.output,
            timeout=args.timeout,
            cc_index=args.cc_index,
        )
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        print(USAGE, file=sys.stderr)
        return 1

    logger.info("Param Finder")
    logger.info("=" * 60)
    logger.info(f"Domains: {', '.join(config.domains)}")
    logger.info(f"Sources: {', '.join(config.sources)}")
    logger.info(f"Timeout: {config.timeout}s")

    try:
        result = await Service().find(config)
    except OSError as e:
        logger.error(f"Error saving URLs to file: {e}")
        return 1

    logger.info(
        f"Tasks: {result.stats.tasks_succeeded} ok, "
        f"{result.stats.tasks_failed} failed, {result.stats.tasks_skipped} skipped"
    )
    logger.debug(f"Stats: {result.stats.to_dict()}")
    logger.info("Done!")
    return 0


def cli() -> None:
    """Console script entry point."""
    load_dotenv()
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    cli()
