"""Reading library exports and writing catalogs as JSON-ready dicts."""
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .clustering import sort_episodes
from .models import (
    MEDIA_TYPES,
    FetchedMetadata,
    LibraryCatalog,
    LibraryEntry,
    MovieGroup,
    ScannedEntry,
    SeriesCluster,
)
from .parser import parse_episode_info

REQUIRED_ITEM_FIELDS = ("id", "title", "file_path", "media_type")


class LibraryFileError(Exception):
    """Exception raised for unreadable or malformed library files."""
    pass


def _json_field(value: Any) -> str | None:
    """Keep JSON-encoded strings as-is; encode lists/dicts."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _optional(raw: dict, name: str, kind: type, position: int) -> Any:
    """Return an optional field, checking its type when present."""
    value = raw.get(name)
    if value is not None and (not isinstance(value, kind) or isinstance(value, bool)):
        raise LibraryFileError(
            f"Entry {position}: {name} must be {kind.__name__} or null, got {type(value).__name__}"
        )
    return value


def _parse_item(raw: Any, position: int) -> ScannedEntry:
    if not isinstance(raw, dict):
        raise LibraryFileError(f"Entry {position}: 'item' must be an object")

    missing = [name for name in REQUIRED_ITEM_FIELDS if not raw.get(name)]
    if missing:
        raise LibraryFileError(
            f"Entry {position}: missing required field(s): {', '.join(missing)}"
        )

    media_type = str(raw["media_type"]).lower()
    if media_type not in MEDIA_TYPES:
        raise LibraryFileError(
            f"Entry {position}: invalid media_type {raw['media_type']!r}"
        )

    file_size = _optional(raw, "file_size", int, position)

    return ScannedEntry(
        id=str(raw["id"]),
        title=str(raw["title"]),
        file_path=str(raw["file_path"]),
        media_type=media_type,
        file_size=file_size,
        series_name_hint=_optional(raw, "series_name", str, position),
    )


def _parse_metadata(raw: Any, position: int) -> FetchedMetadata | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise LibraryFileError(f"Entry {position}: 'metadata' must be an object or null")

    rating = raw.get("rating")
    if rating is not None:
        try:
            rating = float(rating)
        except (TypeError, ValueError):
            rating = None

    return FetchedMetadata(
        title=_optional(raw, "title", str, position),
        poster_url=_optional(raw, "poster_url", str, position),
        release_date=_optional(raw, "release_date", str, position),
        rating=rating,
        genres=_json_field(raw.get("genres")),
        cast_crew=_json_field(raw.get("cast_crew")),
        overview=_optional(raw, "overview", str, position),
        tmdb_id=_optional(raw, "tmdb_id", int, position),
    )


def parse_library_entries(data: Any) -> list[LibraryEntry]:
    """
    Build library entries from a decoded library export.

    Args:
        data: List of {"item": {...}, "metadata": {...} | null} objects

    Returns:
        Entries in file order

    Raises:
        LibraryFileError: If the structure or a required field is invalid
    """
    if not isinstance(data, list):
        raise LibraryFileError("Library file must contain a list of entries")

    entries = []
    for position, raw in enumerate(data):
        if not isinstance(raw, dict) or "item" not in raw:
            raise LibraryFileError(f"Entry {position}: expected an object with an 'item' key")
        entries.append(LibraryEntry(
            item=_parse_item(raw["item"], position),
            metadata=_parse_metadata(raw.get("metadata"), position),
        ))
    return entries


def load_library_file(path: Path) -> list[LibraryEntry]:
    """Load library entries from a JSON export."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LibraryFileError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise LibraryFileError(f"Cannot read {path}: {e}") from e
    return parse_library_entries(data)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def entry_to_dict(entry: LibraryEntry) -> dict[str, Any]:
    data = {
        "item": asdict(entry.item),
        "metadata": asdict(entry.metadata) if entry.metadata is not None else None,
    }
    info = parse_episode_info(entry.item.title)
    if info is not None:
        data["episode"] = asdict(info)
    return data


def movie_group_to_dict(group: MovieGroup) -> dict[str, Any]:
    return {
        "key": group.key,
        "representative": group.representative.item.id,
        "entries": [entry_to_dict(e) for e in group.entries],
    }


def series_cluster_to_dict(cluster: SeriesCluster) -> dict[str, Any]:
    return {
        "key": cluster.key,
        "title": cluster.title,
        "metadata": asdict(cluster.metadata) if cluster.metadata is not None else None,
        "episodes": [entry_to_dict(e) for e in sort_episodes(cluster.episodes)],
    }


def catalog_to_dict(catalog: LibraryCatalog) -> dict[str, Any]:
    """Convert a catalog into plain JSON-serializable data."""
    return {
        "movies": [movie_group_to_dict(g) for g in catalog.movies],
        "series": [series_cluster_to_dict(c) for c in catalog.series],
    }
