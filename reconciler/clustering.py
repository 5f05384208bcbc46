"""Series clustering.

Splits library entries into pass-through movies and series clusters, and
orders a cluster's episodes by season/episode for display.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .models import SERIES, LibraryEntry, SeriesCluster
from .parser import extract_series_name, parse_episode_info
from .slug import slugify

log = logging.getLogger(__name__)

# Season bucket for episodes whose title carries no season/episode marker
UNKNOWN_SEASON = None


@dataclass
class ClusterResult:
    """Output of build_clusters."""
    movies: list[LibraryEntry] = field(default_factory=list)
    series: list[SeriesCluster] = field(default_factory=list)


def is_series_bound(entry: LibraryEntry) -> bool:
    """Check if an entry belongs to a series.

    An episode marker in the title overrides a stored "movie" type, since
    scan-time classification is unreliable.
    """
    return entry.item.media_type == SERIES or parse_episode_info(entry.item.title) is not None


def derive_series_name(entry: LibraryEntry) -> str:
    """Return the series hint when set, else the name parsed from the title."""
    hint = (entry.item.series_name_hint or '').strip()
    return hint or extract_series_name(entry.item.title)


def build_clusters(entries: list[LibraryEntry]) -> ClusterResult:
    """
    Partition entries into movies and series clusters.

    Args:
        entries: Scanned entries with optional metadata, in input order

    Returns:
        ClusterResult with the non-series entries unchanged and one
        SeriesCluster per distinct series slug. Episodes keep input order;
        use sort_episodes() for display order.
    """
    result = ClusterResult()
    by_key: dict[str, list[LibraryEntry]] = {}

    for entry in entries:
        if not is_series_bound(entry):
            result.movies.append(entry)
            continue
        key = slugify(derive_series_name(entry))
        by_key.setdefault(key, []).append(entry)

    for key, episodes in by_key.items():
        metadata = next((e.metadata for e in episodes if e.metadata is not None), None)
        result.series.append(SeriesCluster(
            key=key,
            title=derive_series_name(episodes[0]),
            episodes=episodes,
            metadata=metadata,
        ))

    log.debug(
        "Clustered %d entries: %d movie file(s), %d series",
        len(entries), len(result.movies), len(result.series),
    )
    return result


def episode_sort_key(entry: LibraryEntry) -> tuple[int, int, int]:
    """Sort key placing parsed episodes by (season, episode), unparsed last."""
    info = parse_episode_info(entry.item.title)
    if info is None:
        return (1, 0, 0)
    return (0, info.season, info.episode)


def sort_episodes(episodes: list[LibraryEntry]) -> list[LibraryEntry]:
    """Return episodes in display order. Unparsed entries keep input order."""
    return sorted(episodes, key=episode_sort_key)


def group_by_season(episodes: list[LibraryEntry]) -> dict[int | None, list[LibraryEntry]]:
    """
    Bucket episodes by season, ascending.

    Entries without an episode marker land in UNKNOWN_SEASON, listed after
    every parsed season (including season 0 specials).
    """
    seasons: dict[int | None, list[LibraryEntry]] = {}
    for entry in sort_episodes(episodes):
        info = parse_episode_info(entry.item.title)
        season = info.season if info is not None else UNKNOWN_SEASON
        seasons.setdefault(season, []).append(entry)
    ordered = {season: seasons[season] for season in sorted(s for s in seasons if s is not UNKNOWN_SEASON)}
    if UNKNOWN_SEASON in seasons:
        ordered[UNKNOWN_SEASON] = seasons[UNKNOWN_SEASON]
    return ordered


def find_series_cluster(clusters: list[SeriesCluster], key: str) -> SeriesCluster | None:
    """Look up a cluster by its route key."""
    for cluster in clusters:
        if cluster.key == key:
            return cluster
    return None
