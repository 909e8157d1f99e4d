#!/usr/bin/env python3
"""
Browse the music catalog from the command line.

USAGE:
    python3 browse.py [--config CONFIG] [FILTER OPTIONS]

SYNOPSIS:
    Loads the album catalog (cache first, bundled JSON as fallback), applies
    the requested search, filter and sort options and prints the matching
    albums. Favorites are persisted in the same cache.

COMMAND LINE ARGUMENTS:
    --config      music-catalog YAML configuration file (defaults to the
                  bundled sample catalog)
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from catalog.codec import record_to_dict
from catalog.config import ConfigError, load_config
from catalog.controller import CatalogController
from catalog.models import Album, GenreFilter, SortOption

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config or command line."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)
    logger.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="browse.py",
        description="Search, filter and sort the music catalog.",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to the YAML configuration file.")
    parser.add_argument("--search", type=str, default="", help="Text to match in title, artist or genre.")
    parser.add_argument(
        "--genre",
        type=GenreFilter.parse,
        default=GenreFilter.ALL,
        help=f"Genre filter: {', '.join(g.value for g in GenreFilter)}.",
    )
    parser.add_argument("--min-price", type=float, default=None, help="Lowest price (inclusive); raises the upper bound if needed.")
    parser.add_argument("--max-price", type=float, default=None, help="Highest price (inclusive); lowers the lower bound if needed.")
    parser.add_argument("--min-rating", type=float, default=0.0, help="Minimum album rating (0-5).")
    parser.add_argument(
        "--sort",
        type=SortOption,
        choices=list(SortOption),
        default=SortOption.NEWEST,
        metavar="{" + ",".join(o.value for o in SortOption) + "}",
        help="Sort order.",
    )
    parser.add_argument("--popular", action="store_true", help="Only show popular albums.")
    parser.add_argument("--refresh", action="store_true", help="Ignore the cache and reload the bundled catalog.")
    parser.add_argument("--toggle-favorite", metavar="ALBUM_ID", default=None, help="Add or remove a favorite.")
    parser.add_argument("--favorites", action="store_true", help="List favorite albums instead of filtering.")
    parser.add_argument("--limit", type=int, default=None, help="Print at most this many albums.")
    parser.add_argument("--json", action="store_true", help="Print albums as JSON.")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level.")
    return parser


def apply_arguments(controller: CatalogController, args: argparse.Namespace) -> List[Album]:
    """Push command line filters into the controller and recompute."""
    low, high = controller.default_price_range
    if args.min_price is not None:
        low = args.min_price
    if args.max_price is not None:
        high = args.max_price
    # A single bound given outside the default range moves the other one with it.
    if args.max_price is None:
        high = max(high, low)
    if args.min_price is None:
        low = min(low, high)

    controller.update_search_text(args.search)
    controller.update_genre_filter(args.genre)
    controller.update_price_range(low, high)
    controller.update_minimum_rating(args.min_rating)
    controller.update_sort_option(args.sort)
    if args.popular:
        controller.toggle_popular_filter()
    return controller.apply_filters()


def print_albums(controller: CatalogController, albums: List[Album], limit: Optional[int], as_json: bool) -> None:
    """Print album listing."""
    shown = albums if limit is None else albums[:limit]

    if as_json:
        print(json.dumps([record_to_dict(a) for a in shown], indent=2, ensure_ascii=False))
        return

    print("\n" + "=" * 80)
    print("MUSIC CATALOG")
    print("=" * 80)
    for album in shown:
        marker = "*" if controller.is_favorite(album.id) else " "
        popular = " [popular]" if album.is_popular else ""
        print(
            f"{marker} {album.id:<12} {album.title} - {album.artist_name} "
            f"({album.genre}, {album.release_date}) ${album.price:.2f} "
            f"{album.rating:.1f}/5 [{album.review_count} reviews]{popular}"
        )
    print("-" * 80)
    print(f"Showing {len(shown)} of {len(albums)} matching albums ({len(controller.albums)} total)")
    print("=" * 80)


def main() -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
        logger.debug(f"Loaded configuration version {config.version}")
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(args.log_level or config.log_level)

    controller = CatalogController.from_config(config)
    try:
        loaded = controller.refresh_data() if args.refresh else controller.load_data()
        if not loaded:
            logger.error(controller.error_message)
            sys.exit(1)

        if args.toggle_favorite:
            if controller.store.get_album(args.toggle_favorite) is None:
                logger.warning(f"Album {args.toggle_favorite} is not in the catalog")
            now_favorite = controller.toggle_favorite(args.toggle_favorite)
            logger.info(
                f"{'Added' if now_favorite else 'Removed'} favorite: {args.toggle_favorite}"
            )

        if args.favorites:
            albums = controller.favorite_albums()
        else:
            try:
                albums = apply_arguments(controller, args)
            except ValueError as e:
                logger.error(f"Invalid filter: {e}")
                sys.exit(2)

        print_albums(controller, albums, args.limit, args.json)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)
    finally:
        controller.close()


if __name__ == "__main__":
    main()
