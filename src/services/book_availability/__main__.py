"""
Book Availability Service - CLI Entry Point

Usage:
    python -m src.services.book_availability --isbn ISBN --lat LAT --lon LON \
        --catalog libraries.json [options]

Examples:
    # Libraries within the configured radius of Seoul City Hall
    python -m src.services.book_availability --isbn 9788936434267 \
        --lat 37.5665 --lon 126.9780 --catalog libraries.json

    # Wider search with verbose logging
    python -m src.services.book_availability --isbn 9788936434267 \
        --lat 37.5665 --lon 126.9780 --catalog libraries.json --radius 20 --log-level debug

API keys are read from BOOK_AVAILABILITY_AUTH_KEYS (comma-separated).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from src.common.logging import configure_sanitized_logging

from .catalog import load_catalog_file
from .config import BookAvailabilityConfig
from .core.errors import InputError, ResolutionError
from .core.models import GeoPoint
from .core.protocols import CatalogProvider
from .service import AvailabilityService

logger = logging.getLogger(__name__)

EXIT_RESOLUTION_FAILED = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Find nearby libraries that can lend a book",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--isbn", required=True, help="ISBN-13 of the book")
    parser.add_argument("--lat", required=True, help="Requester latitude in degrees")
    parser.add_argument("--lon", required=True, help="Requester longitude in degrees")
    parser.add_argument(
        "--catalog",
        required=True,
        help="JSON file with the library catalog snapshot",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=None,
        help="Search radius in km (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (default: from config)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> BookAvailabilityConfig:
    """Build configuration from args and environment."""
    overrides = {}

    if args.radius is not None:
        overrides["search_radius_km"] = args.radius
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()

    return BookAvailabilityConfig(**overrides)


async def run_lookup(
    config: BookAvailabilityConfig,
    catalog: CatalogProvider,
    location: GeoPoint,
    isbn: str,
) -> dict:
    """Run one lookup and return the JSON-ready result."""
    async with AvailabilityService.from_config(config, catalog) as service:
        libraries = await service.resolve(location, isbn)

    return {
        "isbn": isbn,
        "libraryList": [library.to_dict() for library in libraries],
    }


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    configure_sanitized_logging(config.log_level)

    try:
        location = GeoPoint.parse(args.lat, args.lon)
        catalog = load_catalog_file(args.catalog)
        result = asyncio.run(run_lookup(config, catalog, location, args.isbn))
    except InputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except OSError as e:
        print(f"Cannot read catalog: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ResolutionError as e:
        logger.error(f"Availability lookup failed: {e}")
        print(f"Availability check failed: {e}", file=sys.stderr)
        return EXIT_RESOLUTION_FAILED

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
