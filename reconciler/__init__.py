"""
Reconciler - Media Library Catalog

Rebuilds the movie and series catalog from scanned media files.
"""
from .models import (
    MOVIE,
    SERIES,
    ScannedEntry,
    FetchedMetadata,
    LibraryEntry,
    EpisodeInfo,
    MovieGroup,
    SeriesCluster,
    LibraryCatalog,
)
from .normalizer import normalize_movie_title, normalize_poster_url
from .parser import parse_episode_info, extract_series_name, is_episode_title
from .slug import slugify
from .dedup import UnionFind, build_movie_groups, select_representative
from .clustering import (
    ClusterResult,
    build_clusters,
    sort_episodes,
    group_by_season,
    find_series_cluster,
)
from .library import build_library
from .cache import CatalogCache

__version__ = "0.1.0"
__all__ = [
    "MOVIE",
    "SERIES",
    "ScannedEntry",
    "FetchedMetadata",
    "LibraryEntry",
    "EpisodeInfo",
    "MovieGroup",
    "SeriesCluster",
    "LibraryCatalog",
    "normalize_movie_title",
    "normalize_poster_url",
    "parse_episode_info",
    "extract_series_name",
    "is_episode_title",
    "slugify",
    "UnionFind",
    "build_movie_groups",
    "select_representative",
    "ClusterResult",
    "build_clusters",
    "sort_episodes",
    "group_by_season",
    "find_series_cluster",
    "build_library",
    "CatalogCache",
]
