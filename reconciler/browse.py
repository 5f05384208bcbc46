"""Search, genre filtering and sorting for catalog listings."""
from __future__ import annotations

import json
from typing import Union

from .models import FetchedMetadata, LibraryEntry, MovieGroup, SeriesCluster

SORT_KEYS = ("title", "year", "rating", "genre")

CatalogItem = Union[MovieGroup, SeriesCluster]


def parse_genres(raw: str | None) -> list[str]:
    """Decode a JSON genre list. Malformed input gives an empty list."""
    if not raw:
        return []
    try:
        genres = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    if not isinstance(genres, list):
        return []
    return [g for g in genres if isinstance(g, str)]


def release_year(metadata: FetchedMetadata | None) -> int:
    """Year from ``release_date`` ("YYYY-MM-DD"), 0 when unknown."""
    if metadata is None or not metadata.release_date:
        return 0
    try:
        return int(metadata.release_date[:4])
    except ValueError:
        return 0


def collect_genres(entries: list[LibraryEntry]) -> list[str]:
    """All genres present in the library, sorted."""
    genres: set[str] = set()
    for entry in entries:
        if entry.metadata is not None:
            genres.update(parse_genres(entry.metadata.genres))
    return sorted(genres)


def item_metadata(item: CatalogItem) -> FetchedMetadata | None:
    if isinstance(item, MovieGroup):
        return item.representative.metadata
    return item.metadata


def display_title(item: CatalogItem) -> str:
    """Metadata title when known, else the scanned or derived title."""
    metadata = item_metadata(item)
    if metadata is not None and metadata.title:
        return metadata.title
    if isinstance(item, MovieGroup):
        return item.representative.item.title
    return item.title


def _first_genre(item: CatalogItem) -> str:
    metadata = item_metadata(item)
    genres = parse_genres(metadata.genres) if metadata is not None else []
    return genres[0] if genres else ""


def _rating(item: CatalogItem) -> float:
    metadata = item_metadata(item)
    if metadata is None or metadata.rating is None:
        return 0.0
    return metadata.rating


def filter_catalog_items(
    items: list[CatalogItem],
    search: str = "",
    genre: str = "",
) -> list[CatalogItem]:
    """
    Filter movie groups or series clusters.

    Args:
        items: Movie groups and/or series clusters
        search: Case-insensitive substring of the display title
        genre: Exact genre name the item must carry

    Returns:
        Matching items in their original order
    """
    needle = search.lower()
    result = []
    for item in items:
        if needle and needle not in display_title(item).lower():
            continue
        if genre:
            metadata = item_metadata(item)
            if metadata is None or genre not in parse_genres(metadata.genres):
                continue
        result.append(item)
    return result


def sort_catalog_items(items: list[CatalogItem], sort_by: str = "title") -> list[CatalogItem]:
    """
    Sort movie groups or series clusters for listing.

    title: ascending. year: newest first. rating: highest first, equal
    ratings keep their relative order. genre: by first genre, then title.

    Raises:
        ValueError: If sort_by is not one of SORT_KEYS
    """
    if sort_by == "title":
        return sorted(items, key=lambda i: display_title(i).casefold())
    if sort_by == "year":
        return sorted(items, key=lambda i: release_year(item_metadata(i)), reverse=True)
    if sort_by == "rating":
        return sorted(items, key=_rating, reverse=True)
    if sort_by == "genre":
        return sorted(items, key=lambda i: (_first_genre(i).casefold(), display_title(i).casefold()))
    raise ValueError(f"Unknown sort key: {sort_by!r} (expected one of {', '.join(SORT_KEYS)})")
