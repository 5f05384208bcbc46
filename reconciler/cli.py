#!/usr/bin/env python3
"""
Reconciler - Media Library Catalog

A CLI tool for grouping a scanned media library into movies and series.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from .browse import SORT_KEYS, display_title, filter_catalog_items, sort_catalog_items
from .clustering import UNKNOWN_SEASON, find_series_cluster, group_by_season
from .library import build_library
from .library_file import LibraryFileError, catalog_to_dict, load_library_file, series_cluster_to_dict
from .models import LibraryCatalog, MovieGroup, SeriesCluster
from .parser import parse_episode_info
from .settings import load_settings

log = logging.getLogger(__name__)


def configure_logging(level_name: str, verbose: bool) -> None:
    """Set up root logging for CLI runs."""
    level = logging.DEBUG if verbose else getattr(logging, str(level_name).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="  [%(levelname)s] %(name)s: %(message)s")


def print_movie_group(group: MovieGroup) -> None:
    """Print one movie group."""
    print(f"  {display_title(group)}")
    print(f"    key: {group.key}")
    if len(group.entries) > 1:
        print(f"    files: {len(group.entries)}")
        for entry in group.entries:
            marker = "*" if entry is group.representative else "-"
            print(f"      {marker} {entry.item.file_path}")
    else:
        print(f"    file: {group.representative.item.file_path}")


def print_series_summary(cluster: SeriesCluster) -> None:
    """Print one series line."""
    count = len(cluster.episodes)
    print(f"  {display_title(cluster)} ({count} episode{'s' if count != 1 else ''})")
    print(f"    key: {cluster.key}")


def print_series_detail(cluster: SeriesCluster) -> None:
    """Print a series with its episodes grouped by season."""
    print(display_title(cluster))
    print("-" * 50)
    for season, episodes in group_by_season(cluster.episodes).items():
        print("Unknown season:" if season is UNKNOWN_SEASON else f"Season {season}:")
        for entry in episodes:
            info = parse_episode_info(entry.item.title)
            label = info.display if info else "??"
            print(f"  {label}  {entry.item.title}")


def print_catalog(catalog: LibraryCatalog, movies: list, series: list) -> None:
    """Print the filtered movie and series listings."""
    print(f"Movies ({len(movies)} of {len(catalog.movies)}):")
    for group in movies:
        print_movie_group(group)
    print()
    print(f"Series ({len(series)} of {len(catalog.series)}):")
    for cluster in series:
        print_series_summary(cluster)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="reconciler",
        description="Group a scanned media library into movies and series."
    )

    parser.add_argument(
        "library",
        type=Path,
        help="JSON export of scanned entries with their metadata"
    )
    parser.add_argument(
        "--sort",
        choices=SORT_KEYS,
        default=settings["sort_by"] if settings["sort_by"] in SORT_KEYS else "title",
        help="Sort order for listings (default: %(default)s)"
    )
    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Only show titles containing this text"
    )
    parser.add_argument(
        "--genre",
        type=str,
        default="",
        help="Only show titles with this genre"
    )
    parser.add_argument(
        "--series",
        type=str,
        default=None,
        metavar="KEY",
        help="Show the episodes of one series by its key"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=settings["output_format"] == "json",
        help="Print JSON instead of text"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed debug information"
    )

    parsed_args = parser.parse_args(args)
    configure_logging(settings["log_level"], parsed_args.verbose)

    try:
        entries = load_library_file(parsed_args.library)
    except LibraryFileError as e:
        print(f"Error: {e}")
        return 1

    catalog = build_library(entries)

    if parsed_args.series is not None:
        cluster = find_series_cluster(catalog.series, parsed_args.series)
        if cluster is None:
            print(f"Error: No series with key '{parsed_args.series}'")
            return 1
        if parsed_args.json:
            print(json.dumps(series_cluster_to_dict(cluster), indent=2, ensure_ascii=False))
        else:
            print_series_detail(cluster)
        return 0

    movies = sort_catalog_items(
        filter_catalog_items(catalog.movies, parsed_args.search, parsed_args.genre),
        parsed_args.sort,
    )
    series = sort_catalog_items(
        filter_catalog_items(catalog.series, parsed_args.search, parsed_args.genre),
        parsed_args.sort,
    )
    log.debug("Showing %d movie(s) and %d series", len(movies), len(series))

    if parsed_args.json:
        print(json.dumps(
            catalog_to_dict(LibraryCatalog(movies=movies, series=series)),
            indent=2,
            ensure_ascii=False,
        ))
    else:
        print_catalog(catalog, movies, series)

    return 0


if __name__ == "__main__":
    sys.exit(main())
